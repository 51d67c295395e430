"""Unit tests for kitchen order read and status use cases"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.kitchen.dtos import ListKitchenOrdersQueryDTO, SetOrderStatusCommandDTO
from src.app.use_cases.kitchen.get_order import GetKitchenOrder
from src.app.use_cases.kitchen.list_orders import ListKitchenOrders
from src.app.use_cases.kitchen.set_order_status import SetKitchenOrderStatus
from src.domain.kitchen_order import KitchenOrder, OrderStatus, OrderType

NOW = datetime(2024, 3, 5, 10, 0, 0)


def make_order(status=OrderStatus.PENDING):
    return KitchenOrder(
        id=5,
        order_number="KO202403050017",
        order_date=NOW,
        guest_name="A. Guest",
        order_type=OrderType.WALK_IN,
        status=status,
        subtotal=Decimal("80.00"),
        tax_amount=Decimal("14.40"),
        total_amount=Decimal("94.40"),
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def mock_order_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_order())
    repo.list = AsyncMock(return_value=[make_order()])
    repo.update = AsyncMock(side_effect=lambda order: order)
    return repo


@pytest.mark.asyncio
class TestSetKitchenOrderStatus:

    @pytest.mark.parametrize("start,target", [
        (OrderStatus.PENDING, OrderStatus.PROCESSING),
        (OrderStatus.COMPLETED, OrderStatus.PENDING),
        (OrderStatus.CANCELLED, OrderStatus.COMPLETED),
    ])
    async def test_any_transition_accepted(self, mock_uow, mock_order_repo, start, target):
        mock_order_repo.get_by_id = AsyncMock(return_value=make_order(start))

        result = await SetKitchenOrderStatus(mock_uow, mock_order_repo).execute(
            5, SetOrderStatusCommandDTO(status=target)
        )

        assert result.is_ok()
        assert result.value.status == target
        mock_uow.commit.assert_called_once()

    async def test_missing_order(self, mock_uow, mock_order_repo):
        mock_order_repo.get_by_id = AsyncMock(return_value=None)

        result = await SetKitchenOrderStatus(mock_uow, mock_order_repo).execute(
            404, SetOrderStatusCommandDTO(status=OrderStatus.COMPLETED)
        )

        assert result.is_err()
        assert result.error.code == "ORDER_NOT_FOUND"
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestReadKitchenOrders:

    async def test_get_includes_lines(self, mock_order_repo):
        order_line_repo = MagicMock()
        order_line_repo.get_by_order_id = AsyncMock(return_value=[])

        result = await GetKitchenOrder(mock_order_repo, order_line_repo).execute(5)

        assert result.is_ok()
        assert result.value.order_number == "KO202403050017"
        order_line_repo.get_by_order_id.assert_called_once_with(5)

    async def test_list_expands_calendar_dates(self, mock_order_repo):
        query = ListKitchenOrdersQueryDTO(
            start_date=date(2024, 3, 1), end_date=date(2024, 3, 5), status=OrderStatus.PENDING
        )

        result = await ListKitchenOrders(mock_order_repo).execute(query)

        assert result.is_ok()
        assert len(result.value.orders) == 1
        kwargs = mock_order_repo.list.call_args.kwargs
        assert kwargs["start_at"] == datetime(2024, 3, 1, 0, 0, 0)
        assert kwargs["end_at"] == datetime(2024, 3, 5, 23, 59, 59, 999999)
        assert kwargs["status"] == OrderStatus.PENDING

    async def test_list_with_open_range(self, mock_order_repo):
        result = await ListKitchenOrders(mock_order_repo).execute(ListKitchenOrdersQueryDTO())

        assert result.is_ok()
        kwargs = mock_order_repo.list.call_args.kwargs
        assert kwargs["start_at"] is None
        assert kwargs["end_at"] is None

    async def test_list_reversed_range(self, mock_order_repo):
        query = ListKitchenOrdersQueryDTO(start_date=date(2024, 3, 5), end_date=date(2024, 3, 1))

        result = await ListKitchenOrders(mock_order_repo).execute(query)

        assert result.is_err()
        assert result.error.code == "INVALID_DATE_RANGE"
