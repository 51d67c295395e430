"""Unit tests for guest register and settings use cases

Tests cover:
- Guest listing with search, guest registration rules
- Reading settings, partial updates and first-time creation
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.resort import (
    CreateGuest,
    CreateGuestCommandDTO,
    GetSettings,
    ListGuests,
    UpdateSettings,
    UpdateSettingsCommandDTO,
)
from src.domain.guest import Guest
from src.domain.settings import ResortSettings

NOW = datetime(2024, 3, 5, 10, 0, 0)


def resort_settings():
    return ResortSettings(
        id=1,
        resort_name="Mountain View Resort & Spa",
        resort_gstin="29AALFM0202M1ZE",
        kitchen_gstin="29AALFM0202M2ZD",
        resort_address="123 Mountain View Road, Shimla",
        resort_contact="+91 9876543210",
        resort_email="info@mountainviewresort.com",
        tax_rate=Decimal("18.00"),
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def mock_guest_repo():
    async def create(guest):
        guest.id = 7
        return guest

    repo = MagicMock()
    repo.list = AsyncMock(return_value=[
        Guest(id=7, name="Asha Rao", mobile="9800000000", room_number="204", created_at=NOW, updated_at=NOW)
    ])
    repo.create = AsyncMock(side_effect=create)
    return repo


@pytest.fixture
def mock_settings_repo():
    async def create(settings):
        settings.id = 1
        return settings

    repo = MagicMock()
    repo.get = AsyncMock(return_value=resort_settings())
    repo.create = AsyncMock(side_effect=create)
    repo.update = AsyncMock(side_effect=lambda settings: settings)
    return repo


@pytest.mark.asyncio
class TestGuests:

    async def test_list_forwards_trimmed_search(self, mock_guest_repo):
        result = await ListGuests(mock_guest_repo).execute("  204 ")

        assert result.is_ok()
        assert [guest.name for guest in result.value] == ["Asha Rao"]
        mock_guest_repo.list.assert_called_once_with(search="204")

    async def test_list_without_search(self, mock_guest_repo):
        await ListGuests(mock_guest_repo).execute("   ")

        mock_guest_repo.list.assert_called_once_with(search=None)

    async def test_list_persistence_failure(self, mock_guest_repo):
        mock_guest_repo.list = AsyncMock(side_effect=RuntimeError("connection reset"))

        result = await ListGuests(mock_guest_repo).execute()

        assert result.is_err()
        assert result.error.code == "PERSISTENCE_ERROR"

    async def test_create(self, mock_uow, mock_guest_repo):
        """
        Given: A guest with stay dates and blank optional fields
        When: The guest is registered
        Then: Blank optional fields are stored as null and the guest is committed
        """
        # Arrange
        command = CreateGuestCommandDTO(
            name=" Ben Ng ",
            mobile="",
            email="ben@example.com",
            room_number="105",
            check_in_date=datetime(2024, 3, 4, 12, 0),
            check_out_date=datetime(2024, 3, 6, 11, 0),
        )

        # Act
        result = await CreateGuest(mock_uow, mock_guest_repo).execute(command)

        # Assert
        assert result.is_ok()
        assert result.value.id == 7
        assert result.value.name == "Ben Ng"
        assert result.value.mobile is None
        assert result.value.is_checked_out is False
        mock_uow.commit.assert_called_once()

    async def test_create_requires_name(self, mock_uow, mock_guest_repo):
        result = await CreateGuest(mock_uow, mock_guest_repo).execute(CreateGuestCommandDTO(name="  "))

        assert result.is_err()
        assert result.error.code == "INVALID_REQUEST"
        assert result.error.message == "Guest name is required"
        mock_guest_repo.create.assert_not_called()

    async def test_create_rejects_check_out_before_check_in(self, mock_uow, mock_guest_repo):
        command = CreateGuestCommandDTO(
            name="Ben Ng",
            check_in_date=datetime(2024, 3, 6, 12, 0),
            check_out_date=datetime(2024, 3, 4, 11, 0),
        )

        result = await CreateGuest(mock_uow, mock_guest_repo).execute(command)

        assert result.is_err()
        assert result.error.code == "INVALID_REQUEST"
        mock_uow.commit.assert_not_called()

    async def test_create_rolls_back_on_failure(self, mock_uow, mock_guest_repo):
        mock_guest_repo.create = AsyncMock(side_effect=RuntimeError("disk full"))

        result = await CreateGuest(mock_uow, mock_guest_repo).execute(CreateGuestCommandDTO(name="Ben Ng"))

        assert result.is_err()
        assert result.error.code == "PERSISTENCE_ERROR"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestSettings:

    async def test_get(self, mock_settings_repo):
        result = await GetSettings(mock_settings_repo).execute()

        assert result.is_ok()
        assert result.value.resort_gstin == "29AALFM0202M1ZE"
        assert result.value.tax_rate == Decimal("18.00")

    async def test_get_when_not_configured(self, mock_settings_repo):
        mock_settings_repo.get = AsyncMock(return_value=None)

        result = await GetSettings(mock_settings_repo).execute()

        assert result.is_err()
        assert result.error.code == "SETTINGS_NOT_FOUND"

    async def test_update_changes_only_supplied_fields(self, mock_uow, mock_settings_repo):
        """
        Given: Configured settings
        When: The kitchen GSTIN and tax rate are updated
        Then: The resort identity is unchanged
        """
        # Arrange
        command = UpdateSettingsCommandDTO(kitchen_gstin=" 29AALFM0202M3ZC ", tax_rate=Decimal("12.00"))

        # Act
        result = await UpdateSettings(mock_uow, mock_settings_repo).execute(command)

        # Assert
        assert result.is_ok()
        assert result.value.kitchen_gstin == "29AALFM0202M3ZC"
        assert result.value.tax_rate == Decimal("12.00")
        assert result.value.resort_name == "Mountain View Resort & Spa"
        mock_settings_repo.update.assert_called_once()
        mock_settings_repo.create.assert_not_called()
        mock_uow.commit.assert_called_once()

    async def test_update_rejects_blank_gstin(self, mock_uow, mock_settings_repo):
        result = await UpdateSettings(mock_uow, mock_settings_repo).execute(
            UpdateSettingsCommandDTO(resort_gstin="")
        )

        assert result.is_err()
        assert result.error.message == "resort_gstin must not be blank"
        mock_settings_repo.update.assert_not_called()

    async def test_first_update_creates_settings(self, mock_uow, mock_settings_repo):
        mock_settings_repo.get = AsyncMock(return_value=None)
        command = UpdateSettingsCommandDTO(
            resort_name="Lakeside Retreat",
            resort_gstin="29AAAAA0000A1Z5",
            kitchen_gstin="29AAAAA0000A2Z4",
            resort_address="1 Lake Road",
            resort_contact="+91 9000000000",
        )

        result = await UpdateSettings(mock_uow, mock_settings_repo).execute(command)

        assert result.is_ok()
        assert result.value.id == 1
        assert result.value.tax_rate == Decimal("18.00")
        mock_settings_repo.create.assert_called_once()

    async def test_first_update_needs_full_identity(self, mock_uow, mock_settings_repo):
        mock_settings_repo.get = AsyncMock(return_value=None)

        result = await UpdateSettings(mock_uow, mock_settings_repo).execute(
            UpdateSettingsCommandDTO(resort_name="Lakeside Retreat")
        )

        assert result.is_err()
        assert result.error.code == "INVALID_REQUEST"
        assert "resort_gstin" in result.error.message
        mock_settings_repo.create.assert_not_called()
