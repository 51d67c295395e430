import logging
from decimal import Decimal
from typing import AsyncIterator
from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.app.services.mail_service import MailService
from src.domain.settings import ResortSettings

logger = logging.getLogger(__name__)


def create_engine(config) -> AsyncEngine:
    engine = create_async_engine(config.DB_URI, echo=config.DB_ECHO, future=True)

    if engine.url.get_backend_name() == "sqlite":
        # SQLite leaves foreign key enforcement off per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def init_db(engine: AsyncEngine, config) -> None:
    """
    Create missing tables and seed the settings record

    Existing tables and an existing settings record are left untouched.
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema ensured")

    async with create_session_factory(engine)() as session:
        result = await session.execute(select(ResortSettings.id).limit(1))
        if result.first() is not None:
            return

        values = dict(config.DEFAULT_SETTINGS)
        values["tax_rate"] = Decimal(str(values.get("tax_rate", "18.00")))
        session.add(ResortSettings(**values))
        await session.commit()
        logger.info(f"Seeded default settings for {values['resort_name']}")


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.session_factory() as session:
        yield session


def get_mail_service(request: Request) -> MailService:
    return request.app.state.mail_service


def get_config(request: Request):
    return request.app.state.config
