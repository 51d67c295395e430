"""Integration tests for the order to invoice flow

Tests cover:
- Kitchen order totals persisted with a real database
- Conversion happens at most once per order, including stale reads and concurrent sessions
- Stored invoice lines add up to their header
- Deleting an invoice releases its order
- Reports over empty and populated ranges, including the last microsecond of a day
- Catalog deletion rules
- Reconciliation worker on the shared engine factory
"""

import asyncio
import logging
import pytest
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import text
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories import (
    SqlAlchemyInvoiceLineRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyKitchenOrderLineRepository,
    SqlAlchemyKitchenOrderRepository,
    SqlAlchemyMenuItemRepository,
    SqlAlchemyReportRepository,
    SqlAlchemyServiceRepository,
    SqlAlchemySettingsRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.billing import CreateInvoice, DeleteInvoice, ReconcileTotals
from src.app.use_cases.billing.dtos import CreateInvoiceCommandDTO
from src.app.use_cases.catalog import DeleteMenuItem
from src.app.use_cases.kitchen import ConvertOrderToInvoice, CreateKitchenOrder
from src.app.use_cases.kitchen.dtos import ConvertOrderCommandDTO, CreateKitchenOrderCommandDTO
from src.app.use_cases.line_items import LineItemInputDTO
from src.app.use_cases.reporting import (
    AggregateInvoices,
    AggregateQueryDTO,
    GstReport,
    KitchenItemsReport,
    SalesReport,
)
from src.domain.invoice import Invoice, InvoiceType, PaymentStatus
from src.domain.invoice_line import InvoiceLine
from src.domain.kitchen_order import KitchenOrder, OrderType
from src.domain.kitchen_order_line import KitchenOrderLine
from src.domain.menu_item import CatalogType, MenuItem
from src.worker.totals_reconciler import TotalsReconcilerWorker

NOW = datetime(2024, 3, 5, 10, 0, 0)
MARCH_1 = date(2024, 3, 1)
MARCH_31 = date(2024, 3, 31)


class StaleSnapshotOrderRepository(SqlAlchemyKitchenOrderRepository):
    """Returns the order as another request read it, before it was billed"""

    async def get_by_id(self, order_id: int, for_update: bool = False):
        order = await super().get_by_id(order_id, for_update)
        if order is None:
            return None
        return KitchenOrder(**{**order.model_dump(), "invoice_id": None})


async def seed_menu(session: AsyncSession):
    repo = SqlAlchemyMenuItemRepository(session)
    paneer = await repo.create(MenuItem(
        name="Paneer Tikka", price=Decimal("450.00"), tax_percentage=Decimal("18.00"),
        type=CatalogType.KITCHEN,
    ))
    naan = await repo.create(MenuItem(
        name="Butter Naan", price=Decimal("80.00"), tax_percentage=Decimal("18.00"),
        type=CatalogType.KITCHEN,
    ))
    await session.commit()
    return paneer, naan


async def place_order(session: AsyncSession, paneer: MenuItem, naan: MenuItem):
    use_case = CreateKitchenOrder(
        uow=SqlAlchemyUnitOfWork(session),
        order_repo=SqlAlchemyKitchenOrderRepository(session),
        order_line_repo=SqlAlchemyKitchenOrderLineRepository(session),
        menu_item_repo=SqlAlchemyMenuItemRepository(session),
        clock=lambda: NOW,
    )
    command = CreateKitchenOrderCommandDTO(
        guest_name="A. Guest",
        room_number="204",
        order_type=OrderType.ROOM,
        lines=[
            LineItemInputDTO(menu_item_id=paneer.id, quantity=2, rate="450.00", tax_percentage="18"),
            LineItemInputDTO(menu_item_id=naan.id, quantity=1, rate="80.00", tax_percentage="18"),
        ],
    )
    result = await use_case.execute(command)
    assert result.is_ok(), result.error
    return result.value


def converter(session: AsyncSession, order_repo=None):
    return ConvertOrderToInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        order_repo=order_repo or SqlAlchemyKitchenOrderRepository(session),
        order_line_repo=SqlAlchemyKitchenOrderLineRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        clock=lambda: NOW,
    )


def invoice_creator(session: AsyncSession, clock=lambda: NOW):
    return CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        menu_item_repo=SqlAlchemyMenuItemRepository(session),
        service_repo=SqlAlchemyServiceRepository(session),
        clock=clock,
    )


async def all_invoices(session: AsyncSession):
    result = await session.execute(select(Invoice))
    return list(result.scalars().all())


@pytest.mark.asyncio
class TestKitchenOrderToInvoiceIntegration:
    """Integration tests with real database"""

    async def test_order_totals_are_persisted(self, db_session: AsyncSession):
        """
        Given: 2 x 450.00 and 1 x 80.00 at 18% GST
        When: The order is placed
        Then: 980.00 + 176.40 = 1156.40 is stored on the header and lines
        """
        # Arrange
        paneer, naan = await seed_menu(db_session)

        # Act
        order = await place_order(db_session, paneer, naan)

        # Assert
        assert order.order_number.startswith("KO20240305")
        assert order.subtotal == Decimal("980.00")
        assert order.tax_amount == Decimal("176.40")
        assert order.total_amount == Decimal("1156.40")

        stored = await SqlAlchemyKitchenOrderRepository(db_session).get_by_id(order.id)
        assert stored.total_amount == Decimal("1156.40")
        lines = await SqlAlchemyKitchenOrderLineRepository(db_session).get_by_order_id(order.id)
        assert sorted(line.line_total for line in lines) == [Decimal("94.40"), Decimal("1062.00")]

    async def test_order_is_converted_once(self, db_session: AsyncSession):
        """
        Given: A kitchen order
        When: It is converted twice
        Then: The first call creates the invoice, the second is a conflict
        """
        paneer, naan = await seed_menu(db_session)
        order = await place_order(db_session, paneer, naan)

        first = await converter(db_session).execute(
            order.id, ConvertOrderCommandDTO(payment_status=PaymentStatus.PAID)
        )
        second = await converter(db_session).execute(order.id, ConvertOrderCommandDTO())

        assert first.is_ok()
        invoice = first.value
        assert invoice.invoice_number.startswith("KT20240305")
        assert invoice.total_amount == Decimal("1156.40")
        assert len(invoice.lines) == 2

        assert second.is_err()
        assert second.error.code == "ORDER_ALREADY_INVOICED"

        invoices = await all_invoices(db_session)
        assert len(invoices) == 1
        stored_order = await SqlAlchemyKitchenOrderRepository(db_session).get_by_id(order.id)
        assert stored_order.invoice_id == invoice.id

    async def test_stale_read_cannot_bill_twice(self, db_session: AsyncSession):
        """
        Given: An order already billed, read by a second request before the link was visible
        When: The second request converts it
        Then: The conditional claim fails and its invoice is rolled back
        """
        paneer, naan = await seed_menu(db_session)
        order = await place_order(db_session, paneer, naan)
        first = await converter(db_session).execute(order.id, ConvertOrderCommandDTO())
        assert first.is_ok()

        stale_repo = StaleSnapshotOrderRepository(db_session)
        second = await converter(db_session, order_repo=stale_repo).execute(
            order.id, ConvertOrderCommandDTO()
        )

        assert second.is_err()
        assert second.error.code == "ORDER_ALREADY_INVOICED"
        invoices = await all_invoices(db_session)
        assert [i.invoice_number for i in invoices] == [first.value.invoice_number]
        lines = (await db_session.execute(select(InvoiceLine))).scalars().all()
        assert len(lines) == 2

    async def test_concurrent_conversions_bill_once(self, session_factory):
        """
        Given: A kitchen order and two independent sessions
        When: Both convert it at the same time
        Then: One succeeds, the other is a conflict, and one invoice exists
        """
        # Arrange
        async with session_factory() as setup:
            paneer, naan = await seed_menu(setup)
            order = await place_order(setup, paneer, naan)

        async def convert():
            async with session_factory() as session:
                result = await converter(session).execute(order.id, ConvertOrderCommandDTO())
                return "OK" if result.is_ok() else result.error.code

        # Act
        codes = await asyncio.gather(convert(), convert())

        # Assert
        assert sorted(codes) == ["OK", "ORDER_ALREADY_INVOICED"]
        async with session_factory() as session:
            invoices = await all_invoices(session)
            assert len(invoices) == 1
            billed = await SqlAlchemyKitchenOrderRepository(session).get_by_id(order.id)
            assert billed.invoice_id == invoices[0].id

    async def test_stored_lines_add_up_to_header(self, db_session: AsyncSession):
        """
        Given: Two lines of 1 x 45.50 at 5% (2.275 tax each)
        When: The invoice is created
        Then: The stored line rows sum exactly to the stored header
        """
        result = await invoice_creator(db_session).execute(CreateInvoiceCommandDTO(
            guest_name="A. Guest",
            type=InvoiceType.KITCHEN,
            lines=[
                LineItemInputDTO(name="Masala Chai", quantity=1, rate="45.50", tax_percentage="5"),
                LineItemInputDTO(name="Masala Chai", quantity=1, rate="45.50", tax_percentage="5"),
            ],
        ))
        assert result.is_ok(), result.error

        header = await SqlAlchemyInvoiceRepository(db_session).get_by_id(result.value.id)
        lines = await SqlAlchemyInvoiceLineRepository(db_session).get_by_invoice_id(header.id)

        assert header.tax_amount == Decimal("4.56")
        assert header.total_amount == Decimal("95.56")
        assert sum(line.tax_amount for line in lines) == header.tax_amount
        assert sum(line.line_total for line in lines) == header.total_amount
        assert header.subtotal + header.tax_amount == header.total_amount

    async def test_deleting_invoice_releases_order(self, db_session: AsyncSession):
        """
        Given: A billed order
        When: Its invoice is deleted
        Then: The invoice lines are gone and the order can be billed again
        """
        paneer, naan = await seed_menu(db_session)
        order = await place_order(db_session, paneer, naan)
        invoice = (await converter(db_session).execute(order.id, ConvertOrderCommandDTO())).value

        deleted = await DeleteInvoice(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyInvoiceRepository(db_session),
            SqlAlchemyInvoiceLineRepository(db_session),
        ).execute(invoice.id)

        assert deleted.is_ok()
        assert await SqlAlchemyInvoiceRepository(db_session).get_by_id(invoice.id) is None
        assert await SqlAlchemyInvoiceLineRepository(db_session).get_by_invoice_id(invoice.id) == []
        released = await SqlAlchemyKitchenOrderRepository(db_session).get_by_id(order.id)
        assert released.invoice_id is None

        rebilled = await converter(db_session).execute(order.id, ConvertOrderCommandDTO())
        assert rebilled.is_ok()

    async def test_missing_order(self, db_session: AsyncSession):
        result = await converter(db_session).execute(999, ConvertOrderCommandDTO())

        assert result.is_err()
        assert result.error.code == "ORDER_NOT_FOUND"


@pytest.mark.asyncio
class TestReportsIntegration:

    async def test_empty_range_reports_zeros(self, db_session: AsyncSession):
        report_repo = SqlAlchemyReportRepository(db_session)

        sales = await SalesReport(report_repo).execute(MARCH_1, MARCH_31)
        gst = await GstReport(report_repo, SqlAlchemySettingsRepository(db_session)).execute(MARCH_1, MARCH_31)
        items = await KitchenItemsReport(report_repo).execute(MARCH_1, MARCH_31)

        assert sales.is_ok() and gst.is_ok() and items.is_ok()
        assert sales.value.summary.invoice_count == 0
        assert sales.value.summary.total_amount == Decimal("0.00")
        assert gst.value.resort.tax_amount == Decimal("0.00")
        assert gst.value.kitchen.invoice_count == 0
        assert items.value.items == []

    async def test_sales_and_kitchen_items(self, db_session: AsyncSession):
        paneer, naan = await seed_menu(db_session)
        order = await place_order(db_session, paneer, naan)
        await converter(db_session).execute(order.id, ConvertOrderCommandDTO())
        report_repo = SqlAlchemyReportRepository(db_session)

        sales = await SalesReport(report_repo).execute(MARCH_1, MARCH_31, InvoiceType.KITCHEN)
        items = await KitchenItemsReport(report_repo).execute(MARCH_1, MARCH_31)
        outside = await SalesReport(report_repo).execute(date(2024, 3, 6), MARCH_31)

        assert sales.value.summary.invoice_count == 1
        assert sales.value.summary.subtotal == Decimal("980.00")
        assert sales.value.summary.tax_amount == Decimal("176.40")
        assert sales.value.summary.total_amount == Decimal("1156.40")
        assert sales.value.daily[0].date == date(2024, 3, 5)

        assert [(i.name, i.total_quantity) for i in items.value.items] == [
            ("Paneer Tikka", 2),
            ("Butter Naan", 1),
        ]
        assert outside.value.summary.invoice_count == 0

    async def test_last_microsecond_of_end_date_is_included(self, db_session: AsyncSession):
        """
        Given: A resort invoice dated 2024-03-05 23:59:59.500000
        When: Sales are reported for 2024-03-05 alone
        Then: The invoice is counted
        """
        late = datetime(2024, 3, 5, 23, 59, 59, 500000)
        created = await invoice_creator(db_session, clock=lambda: late).execute(CreateInvoiceCommandDTO(
            guest_name="Late Arrival",
            type=InvoiceType.RESORT,
            lines=[LineItemInputDTO(name="Room night", quantity=1, rate="1000.00", tax_percentage="18")],
        ))
        assert created.is_ok(), created.error

        report_repo = SqlAlchemyReportRepository(db_session)
        same_day = await SalesReport(report_repo).execute(date(2024, 3, 5), date(2024, 3, 5))
        next_day = await SalesReport(report_repo).execute(date(2024, 3, 6), date(2024, 3, 6))

        assert same_day.value.summary.invoice_count == 1
        assert same_day.value.summary.total_amount == Decimal("1180.00")
        assert next_day.value.summary.invoice_count == 0

    async def test_aggregate_summary_matches_database(self, db_session: AsyncSession, caplog):
        """
        Given: Three resort invoices, two paid and one pending
        When: The aggregated resort report is built
        Then: The in-memory summary agrees with the database totals
        """
        create = invoice_creator(db_session)
        for guest, status in (("Asha Rao", PaymentStatus.PAID), ("Ben Ng", PaymentStatus.PAID),
                              ("Asha Rao", PaymentStatus.PENDING)):
            result = await create.execute(CreateInvoiceCommandDTO(
                guest_name=guest,
                type=InvoiceType.RESORT,
                payment_status=status,
                lines=[LineItemInputDTO(name="Room night", quantity=1, rate="1000.00", tax_percentage="18")],
            ))
            assert result.is_ok()

        aggregate = AggregateInvoices(
            invoice_repo=SqlAlchemyInvoiceRepository(db_session),
            invoice_line_repo=SqlAlchemyInvoiceLineRepository(db_session),
            order_repo=SqlAlchemyKitchenOrderRepository(db_session),
            settings_repo=SqlAlchemySettingsRepository(db_session),
            report_repo=SqlAlchemyReportRepository(db_session),
        )

        with caplog.at_level(logging.ERROR):
            everyone = await aggregate.execute(
                InvoiceType.RESORT, AggregateQueryDTO(from_date=MARCH_1, to_date=MARCH_31)
            )
            asha = await aggregate.execute(
                InvoiceType.RESORT,
                AggregateQueryDTO(from_date=MARCH_1, to_date=MARCH_31, guest_name="asha"),
            )

        summary = everyone.value.summary
        assert summary.total_invoices == 3
        assert summary.total_subtotal == Decimal("3000.00")
        assert summary.total_tax == Decimal("540.00")
        assert summary.total_amount == Decimal("3540.00")
        assert summary.payment_status_summary == {"pending": 1, "paid": 2, "cancelled": 0}
        assert all(len(invoice.lines) == 1 for invoice in everyone.value.invoices)

        assert asha.value.summary.total_invoices == 2
        assert asha.value.guest_filter == "asha"
        assert "disagrees" not in caplog.text

    async def test_reconciliation_finds_tampered_header(self, db_session: AsyncSession):
        paneer, naan = await seed_menu(db_session)
        order = await place_order(db_session, paneer, naan)
        invoice = (await converter(db_session).execute(order.id, ConvertOrderCommandDTO())).value

        stored = await SqlAlchemyInvoiceRepository(db_session).get_by_id(invoice.id)
        stored.total_amount = Decimal("1200.00")
        await db_session.commit()

        result = await ReconcileTotals(
            SqlAlchemyInvoiceRepository(db_session),
            SqlAlchemyInvoiceLineRepository(db_session),
            SqlAlchemyKitchenOrderRepository(db_session),
            SqlAlchemyKitchenOrderLineRepository(db_session),
        ).execute(MARCH_1, MARCH_31)

        assert result.is_ok()
        assert result.value.invoices_checked == 1
        assert result.value.orders_checked == 1
        assert [d.number for d in result.value.discrepancies] == [invoice.invoice_number]


@pytest.mark.asyncio
class TestCatalogIntegration:

    async def test_billed_menu_item_cannot_be_deleted(self, db_session: AsyncSession):
        paneer, naan = await seed_menu(db_session)
        order = await place_order(db_session, paneer, naan)
        await converter(db_session).execute(order.id, ConvertOrderCommandDTO())

        result = await DeleteMenuItem(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyMenuItemRepository(db_session),
            SqlAlchemyInvoiceLineRepository(db_session),
        ).execute(paneer.id)

        assert result.is_err()
        assert result.error.code == "CATALOG_ENTRY_IN_USE"
        assert await SqlAlchemyMenuItemRepository(db_session).get_by_id(paneer.id) is not None

    async def test_deleting_unbilled_item_removes_its_order_lines(self, db_session: AsyncSession):
        paneer, naan = await seed_menu(db_session)
        order = await place_order(db_session, paneer, naan)

        result = await DeleteMenuItem(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyMenuItemRepository(db_session),
            SqlAlchemyInvoiceLineRepository(db_session),
        ).execute(naan.id)

        assert result.is_ok()
        remaining = (
            await db_session.execute(select(KitchenOrderLine).where(KitchenOrderLine.order_id == order.id))
        ).scalars().all()
        assert [line.item_name for line in remaining] == ["Paneer Tikka"]


@pytest.mark.asyncio
class TestTotalsReconcilerWorkerIntegration:

    async def test_worker_engine_enforces_foreign_keys(self, test_config, db_session: AsyncSession):
        """
        Given: The reconciliation worker built from the application config
        When: It connects to SQLite
        Then: Foreign key enforcement is on, like for API sessions
        """
        worker = TotalsReconcilerWorker(config=test_config, clock=lambda: NOW)
        try:
            async with worker.engine.connect() as conn:
                enabled = (await conn.execute(text("PRAGMA foreign_keys"))).scalar()

            assert enabled == 1
        finally:
            await worker.shutdown()

    async def test_worker_reconciles_real_database(self, test_config, db_session: AsyncSession):
        paneer, naan = await seed_menu(db_session)
        order = await place_order(db_session, paneer, naan)
        await converter(db_session).execute(order.id, ConvertOrderCommandDTO())

        worker = TotalsReconcilerWorker(config=test_config, lookback_days=7, clock=lambda: NOW)
        try:
            result = await worker.run_once()
        finally:
            await worker.shutdown()

        assert result.start_date == date(2024, 2, 28)
        assert result.end_date == date(2024, 3, 5)
        assert result.invoices_checked == 1
        assert result.orders_checked == 1
        assert result.discrepancies_found == 0
