"""Totals Reconciliation Background Worker

Periodically recomputes invoice and kitchen order totals from their lines and
reports headers whose stored totals have drifted. Read-only.
"""

import argparse
import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Tuple

from config import ApplicationConfig
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.kitchen_order_line_repository import SqlAlchemyKitchenOrderLineRepository
from src.adapter.repositories.kitchen_order_repository import SqlAlchemyKitchenOrderRepository
from src.app.use_cases.billing import ReconcileTotals, ReconciliationResultDTO
from src.depends import create_engine, create_session_factory
from src.domain.base import utc_now

logger = logging.getLogger(__name__)


class TotalsReconcilerWorker:
    """
    Background worker for header/line totals reconciliation

    Checks the last RECONCILIATION_LOOKBACK_DAYS days (today included).

    Usage:
        worker = TotalsReconcilerWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(
        self,
        config=None,
        lookback_days: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config or ApplicationConfig
        self.db_uri = self.config.DB_URI
        self.lookback_days = lookback_days or self.config.RECONCILIATION_LOOKBACK_DAYS
        self.clock = clock

        self.engine = create_engine(self.config)
        self.async_session_factory = create_session_factory(self.engine)

        logger.info(f"TotalsReconcilerWorker initialized (lookback={self.lookback_days} days)")

    def window(self) -> Tuple[date, date]:
        end_date = self.clock().date()
        start_date = end_date - timedelta(days=self.lookback_days - 1)
        return start_date, end_date

    async def run_once(self) -> ReconciliationResultDTO:
        start_date, end_date = self.window()

        if not getattr(self.config, "RECONCILIATION_ENABLED", True):
            logger.info("Totals reconciliation is disabled, skipping")
            return ReconciliationResultDTO(
                start_date=start_date,
                end_date=end_date,
                invoices_checked=0,
                orders_checked=0,
                discrepancies_found=0,
                discrepancies=[],
                reconciliation_time=self.clock(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            use_case = ReconcileTotals(
                invoice_repo=SqlAlchemyInvoiceRepository(session),
                invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
                order_repo=SqlAlchemyKitchenOrderRepository(session),
                order_line_repo=SqlAlchemyKitchenOrderLineRepository(session),
            )

            result = await use_case.execute(start_date, end_date)

            if result.is_err():
                logger.error(f"Reconciliation failed: {result.error.message} ({result.error.reason})")
                raise RuntimeError(f"Reconciliation failed: {result.error.message}")

            response = result.value

            if response.discrepancies_found > 0:
                logger.error(f"ALERT: {response.discrepancies_found} totals discrepancies found!")
                for d in response.discrepancies:
                    logger.error(
                        f"  - {d.document} {d.number} (id={d.document_id}): "
                        f"stored total={d.stored_total_amount}, computed total={d.computed_total_amount}"
                    )

            return response

    async def run_forever(self, interval_seconds: int = 86400):
        logger.info(f"Starting continuous totals reconciliation with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Reconciliation cycle complete. "
                    f"Checked {result.invoices_checked} invoices and {result.orders_checked} orders, "
                    f"found {result.discrepancies_found} discrepancies "
                    f"in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Reconciliation cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        await self.engine.dispose()
        logger.info("TotalsReconcilerWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.totals_reconciler --once
        python -m src.worker.totals_reconciler --interval 3600
    """
    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Totals Reconciliation Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument(
        "--interval",
        type=int,
        default=int(ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS),
        help="Interval between runs in seconds",
    )
    parser.add_argument("--days", type=int, default=None, help="Lookback window in days")
    args = parser.parse_args()

    worker = TotalsReconcilerWorker(lookback_days=args.days)

    try:
        if args.once:
            result = await worker.run_once()
            print("Reconciliation complete:")
            print(f"  Window: {result.start_date} to {result.end_date}")
            print(f"  Invoices checked: {result.invoices_checked}")
            print(f"  Orders checked: {result.orders_checked}")
            print(f"  Discrepancies found: {result.discrepancies_found}")
            for d in result.discrepancies:
                print(
                    f"  - {d.document} {d.number}: "
                    f"stored={d.stored_total_amount}, computed={d.computed_total_amount}"
                )
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
