import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./resort_billing.db")
    DB_ECHO = bool(data.get("DB_ECHO", False))
    # Create missing tables and seed DEFAULT_SETTINGS on startup
    DB_AUTO_CREATE = bool(data.get("DB_AUTO_CREATE", True))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Order / invoice numbering
    NUMBER_RETRY_ATTEMPTS = int(data.get("NUMBER_RETRY_ATTEMPTS", 5))

    # Invoice e-mail delivery (falls back to logging when EMAIL_HOST is empty)
    EMAIL_HOST = data.get("EMAIL_HOST", "")
    EMAIL_PORT = int(data.get("EMAIL_PORT", 587))
    EMAIL_USER = data.get("EMAIL_USER", "")
    EMAIL_PASS = data.get("EMAIL_PASS", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "") or EMAIL_USER
    EMAIL_TIMEOUT_SECONDS = float(data.get("EMAIL_TIMEOUT_SECONDS", 10.0))

    # Header/line totals reconciliation
    RECONCILIATION_ENABLED = bool(data.get("RECONCILIATION_ENABLED", True))
    RECONCILIATION_INTERVAL_SECONDS = data.get("RECONCILIATION_INTERVAL_SECONDS", 86400)  # Daily
    RECONCILIATION_LOOKBACK_DAYS = int(data.get("RECONCILIATION_LOOKBACK_DAYS", 31))

    # Settings record seeded into an empty database
    DEFAULT_SETTINGS = data.get("DEFAULT_SETTINGS") or {
        "resort_name": "Mountain View Resort & Spa",
        "resort_gstin": "29AALFM0202M1ZE",
        "kitchen_gstin": "29AALFM0202M2ZD",
        "resort_address": "123 Mountain View Road, Shimla, Himachal Pradesh, India",
        "resort_contact": "+91 9876543210",
        "resort_email": "info@mountainviewresort.com",
        "tax_rate": "18.00",
    }
