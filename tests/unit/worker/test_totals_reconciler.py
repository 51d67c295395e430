"""Unit tests for TotalsReconcilerWorker

Tests cover:
- Worker initialization with configuration
- Lookback window
- run_once execution, disabled scenario, discrepancies and failures
- Shutdown and cleanup
"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from src.worker.totals_reconciler import TotalsReconcilerWorker
from src.app.use_cases.billing.dtos import ReconciliationResultDTO, TotalsDiscrepancyDTO

NOW = datetime(2024, 3, 10, 2, 0, 0)


@pytest.fixture
def sample_reconciliation_result():
    """Sample clean reconciliation result"""
    return ReconciliationResultDTO(
        start_date=date(2024, 3, 4),
        end_date=date(2024, 3, 10),
        invoices_checked=12,
        orders_checked=7,
        discrepancies_found=0,
        discrepancies=[],
        reconciliation_time=NOW,
        execution_time_ms=42,
    )


@pytest.fixture
def sample_discrepancy_result(sample_reconciliation_result):
    """Sample reconciliation result with one drifted invoice"""
    return sample_reconciliation_result.model_copy(update={
        "discrepancies_found": 1,
        "discrepancies": [
            TotalsDiscrepancyDTO(
                document="invoice",
                document_id=3,
                number="KT202403080042",
                stored_subtotal=Decimal("900.00"),
                stored_tax_amount=Decimal("162.00"),
                stored_total_amount=Decimal("1100.00"),
                computed_subtotal=Decimal("900.00"),
                computed_tax_amount=Decimal("162.00"),
                computed_total_amount=Decimal("1062.00"),
            )
        ],
    })


def configure(mock_app_config, enabled=True):
    mock_app_config.DB_URI = "sqlite+aiosqlite:///./test.db"
    mock_app_config.RECONCILIATION_ENABLED = enabled
    mock_app_config.RECONCILIATION_LOOKBACK_DAYS = 7


def session_factory(mock_session_factory):
    mock_session = MagicMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=False)
    mock_session_factory.return_value = MagicMock(return_value=mock_session)
    return mock_session


def use_case_returning(mock_use_case_class, value=None, error=None):
    mock_use_case = MagicMock()
    mock_result = MagicMock()
    mock_result.is_err.return_value = error is not None
    mock_result.value = value
    mock_result.error = error
    mock_use_case.execute = AsyncMock(return_value=mock_result)
    mock_use_case_class.return_value = mock_use_case
    return mock_use_case


class TestTotalsReconcilerWorkerInit:
    """Test worker initialization"""

    @patch("src.worker.totals_reconciler.ApplicationConfig")
    @patch("src.worker.totals_reconciler.create_engine")
    def test_initializes_with_default_config(self, mock_create_engine, mock_app_config):
        """
        Given: No custom configuration provided
        When: Worker is initialized
        Then: Uses defaults from ApplicationConfig
        """
        # Arrange
        configure(mock_app_config)

        # Act
        worker = TotalsReconcilerWorker()

        # Assert
        assert worker.db_uri == "sqlite+aiosqlite:///./test.db"
        assert worker.lookback_days == 7
        mock_create_engine.assert_called_once_with(mock_app_config)

    @patch("src.worker.totals_reconciler.create_session_factory")
    @patch("src.worker.totals_reconciler.create_engine")
    def test_uses_shared_engine_factory_with_given_config(
        self, mock_create_engine, mock_session_factory
    ):
        """
        Given: An explicit configuration
        When: Worker is initialized
        Then: The engine and sessions come from the application factories
        """
        config = MagicMock()
        config.DB_URI = "sqlite+aiosqlite:///./other.db"
        config.RECONCILIATION_LOOKBACK_DAYS = 3

        worker = TotalsReconcilerWorker(config=config)

        assert worker.db_uri == "sqlite+aiosqlite:///./other.db"
        assert worker.lookback_days == 3
        mock_create_engine.assert_called_once_with(config)
        mock_session_factory.assert_called_once_with(mock_create_engine.return_value)

    @patch("src.worker.totals_reconciler.ApplicationConfig")
    @patch("src.worker.totals_reconciler.create_engine")
    def test_window_includes_today(self, mock_create_engine, mock_app_config):
        configure(mock_app_config)

        worker = TotalsReconcilerWorker(lookback_days=3, clock=lambda: NOW)

        assert worker.window() == (date(2024, 3, 8), date(2024, 3, 10))


@pytest.mark.asyncio
class TestTotalsReconcilerWorkerRunOnce:
    """Test run_once execution"""

    @patch("src.worker.totals_reconciler.ApplicationConfig")
    @patch("src.worker.totals_reconciler.ReconcileTotals")
    @patch("src.worker.totals_reconciler.create_engine")
    @patch("src.worker.totals_reconciler.create_session_factory")
    async def test_run_once_executes_reconciliation(
        self,
        mock_session_factory,
        mock_create_engine,
        mock_use_case_class,
        mock_app_config,
        sample_reconciliation_result,
    ):
        """
        Given: Reconciliation is enabled
        When: run_once is called
        Then: Reconciles the lookback window and returns the result
        """
        # Arrange
        configure(mock_app_config)
        session_factory(mock_session_factory)
        mock_use_case = use_case_returning(mock_use_case_class, value=sample_reconciliation_result)

        # Act
        worker = TotalsReconcilerWorker(clock=lambda: NOW)
        result = await worker.run_once()

        # Assert
        assert result.invoices_checked == 12
        assert result.discrepancies_found == 0
        mock_use_case.execute.assert_called_once_with(date(2024, 3, 4), date(2024, 3, 10))

    @patch("src.worker.totals_reconciler.ApplicationConfig")
    @patch("src.worker.totals_reconciler.ReconcileTotals")
    @patch("src.worker.totals_reconciler.create_engine")
    async def test_run_once_skips_when_disabled(
        self, mock_create_engine, mock_use_case_class, mock_app_config
    ):
        """
        Given: Reconciliation is disabled
        When: run_once is called
        Then: Returns an empty result without touching the database
        """
        configure(mock_app_config, enabled=False)

        worker = TotalsReconcilerWorker(clock=lambda: NOW)
        result = await worker.run_once()

        assert result.invoices_checked == 0
        assert result.orders_checked == 0
        assert result.execution_time_ms == 0
        mock_use_case_class.assert_not_called()

    @patch("src.worker.totals_reconciler.ApplicationConfig")
    @patch("src.worker.totals_reconciler.ReconcileTotals")
    @patch("src.worker.totals_reconciler.create_engine")
    @patch("src.worker.totals_reconciler.create_session_factory")
    async def test_run_once_logs_discrepancies(
        self,
        mock_session_factory,
        mock_create_engine,
        mock_use_case_class,
        mock_app_config,
        sample_discrepancy_result,
        caplog,
    ):
        configure(mock_app_config)
        session_factory(mock_session_factory)
        use_case_returning(mock_use_case_class, value=sample_discrepancy_result)

        worker = TotalsReconcilerWorker(clock=lambda: NOW)
        result = await worker.run_once()

        assert result.discrepancies_found == 1
        assert "KT202403080042" in caplog.text

    @patch("src.worker.totals_reconciler.ApplicationConfig")
    @patch("src.worker.totals_reconciler.ReconcileTotals")
    @patch("src.worker.totals_reconciler.create_engine")
    @patch("src.worker.totals_reconciler.create_session_factory")
    async def test_run_once_raises_on_error(
        self, mock_session_factory, mock_create_engine, mock_use_case_class, mock_app_config
    ):
        configure(mock_app_config)
        session_factory(mock_session_factory)
        failure = MagicMock()
        failure.message = "Failed to reconcile totals"
        failure.reason = "OperationalError: database is locked"
        use_case_returning(mock_use_case_class, error=failure)

        worker = TotalsReconcilerWorker(clock=lambda: NOW)

        with pytest.raises(RuntimeError, match="Reconciliation failed"):
            await worker.run_once()


@pytest.mark.asyncio
class TestTotalsReconcilerWorkerShutdown:

    @patch("src.worker.totals_reconciler.ApplicationConfig")
    @patch("src.worker.totals_reconciler.create_engine")
    async def test_shutdown_disposes_engine(self, mock_create_engine, mock_app_config):
        configure(mock_app_config)
        mock_engine = MagicMock()
        mock_engine.dispose = AsyncMock()
        mock_create_engine.return_value = mock_engine

        worker = TotalsReconcilerWorker()
        await worker.shutdown()

        mock_engine.dispose.assert_called_once()
