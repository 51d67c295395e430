"""Integration tests for database bootstrap

Tests cover:
- Tables and the default settings record are created on an empty database
- Repeated bootstrap leaves existing data alone
- The application lifespan bootstraps only when DB_AUTO_CREATE is set
"""

import pytest
from decimal import Decimal
from sqlalchemy import inspect
from sqlmodel import select

from src.api.app import create_app
from src.depends import create_engine, create_session_factory, init_db
from src.domain.settings import ResortSettings


async def table_names(engine):
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


async def stored_settings(engine):
    async with create_session_factory(engine)() as session:
        result = await session.execute(select(ResortSettings))
        return list(result.scalars().all())


@pytest.mark.asyncio
class TestInitDb:

    async def test_creates_schema_and_seeds_settings(self, test_config):
        """
        Given: An empty SQLite database
        When: The database is bootstrapped
        Then: Every table exists and one settings record holds the configured defaults
        """
        # Arrange
        engine = create_engine(test_config)

        try:
            # Act
            await init_db(engine, test_config)

            # Assert
            tables = await table_names(engine)
            for table in ("settings", "guests", "menu_items", "services", "invoices",
                          "invoice_items", "kitchen_orders", "kitchen_order_items"):
                assert table in tables

            settings = await stored_settings(engine)
            assert len(settings) == 1
            assert settings[0].resort_name == "Test Resort"
            assert settings[0].kitchen_gstin == "29AAAAA0000A2Z4"
            assert settings[0].tax_rate == Decimal("18.00")
        finally:
            await engine.dispose()

    async def test_is_idempotent_and_keeps_edited_settings(self, test_config):
        engine = create_engine(test_config)

        try:
            await init_db(engine, test_config)
            async with create_session_factory(engine)() as session:
                settings = (await session.execute(select(ResortSettings))).scalar_one()
                settings.resort_name = "Lakeside Retreat"
                await session.commit()

            await init_db(engine, test_config)

            settings = await stored_settings(engine)
            assert [s.resort_name for s in settings] == ["Lakeside Retreat"]
        finally:
            await engine.dispose()


@pytest.mark.asyncio
class TestLifespanBootstrap:

    async def test_lifespan_bootstraps_when_enabled(self, test_config):
        test_config.DB_AUTO_CREATE = True
        app = create_app(test_config)

        async with app.router.lifespan_context(app):
            settings = await stored_settings(app.state.engine)

        assert len(settings) == 1

    async def test_lifespan_skips_bootstrap_when_disabled(self, test_config):
        app = create_app(test_config)

        async with app.router.lifespan_context(app):
            tables = await table_names(app.state.engine)

        assert "settings" not in tables
