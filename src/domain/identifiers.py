"""Order and invoice number generation

Format: PREFIX + YYYYMMDD + 4-digit random suffix, e.g. KT202403050042.
Only 10,000 suffixes exist per prefix and day, so callers must treat a unique
constraint violation on insert as retryable.
"""

import random
import re
from datetime import datetime
from typing import Optional

KITCHEN_ORDER_PREFIX = "KO"
RESORT_INVOICE_PREFIX = "RS"
KITCHEN_INVOICE_PREFIX = "KT"

SUFFIX_SPACE = 10000

_system_random = random.SystemRandom()


def generate_document_number(
    prefix: str, when: datetime, rng: Optional[random.Random] = None
) -> str:
    """
    Generate a human readable document number

    Args:
        prefix: Document type prefix (KO, RS, KT)
        when: Creation timestamp; only its calendar date is used
        rng: Optional random source (defaults to SystemRandom)

    Returns:
        Document number string
    """
    if not prefix:
        raise ValueError("Document number prefix must not be empty")
    source = rng or _system_random
    suffix = source.randrange(SUFFIX_SPACE)
    return f"{prefix}{when:%Y%m%d}{suffix:04d}"


def document_number_pattern(prefix: str) -> "re.Pattern[str]":
    return re.compile(rf"^{re.escape(prefix)}\d{{8}}\d{{4}}$")
