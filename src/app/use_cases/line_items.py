"""Line item input shared by kitchen orders and invoices

Callers submit raw line values; a line that references a catalog entry may
omit its name, rate and tax percentage and take them from the catalog.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from src.app.repositories.catalog_repository import MenuItemRepository, ServiceRepository
from src.domain.pricing import InvalidLineItem, LineItem, ReferenceKind, parse_line_item


class UnknownCatalogReference(ValueError):
    def __init__(self, index: int, kind: ReferenceKind, reference_id: int):
        self.index = index
        self.kind = kind
        self.reference_id = reference_id
        super().__init__(f"Line {index + 1}: {kind.value} {reference_id} does not exist")


class LineItemInputDTO(BaseModel):
    """
    One submitted line

    Numeric fields are kept as submitted and parsed by the pricing rules,
    so an unparseable value is reported as a line error.
    """

    menu_item_id: Optional[int] = Field(default=None, description="Menu item the line is drawn from")
    service_id: Optional[int] = Field(default=None, description="Service the line is drawn from")
    name: Optional[str] = Field(default=None, description="Item name (defaults to the catalog name)")
    quantity: Any = Field(default=None, description="Positive integer")
    rate: Any = Field(default=None, description="Unit price (defaults to the catalog price)")
    tax_percentage: Any = Field(default=None, description="GST % (defaults to the catalog value)")
    booking_date: Optional[date] = Field(default=None, description="Service date (invoice lines)")

    class Config:
        json_schema_extra = {
            "example": {
                "menu_item_id": 12,
                "quantity": 2,
                "rate": "450.00",
                "tax_percentage": "18.00"
            }
        }


class LineItemDTO(BaseModel):
    """Persisted line as returned to callers"""

    id: int
    menu_item_id: Optional[int] = None
    service_id: Optional[int] = None
    item_name: str
    quantity: int
    rate: Decimal
    tax_percentage: Decimal
    tax_amount: Decimal
    line_total: Decimal
    booking_date: Optional[date] = None


def _pick(submitted: Any, catalog_value: Any) -> Any:
    if submitted is None or (isinstance(submitted, str) and not submitted.strip()):
        return catalog_value
    return submitted


async def resolve_line_items(
    lines: List[LineItemInputDTO],
    menu_item_repo: MenuItemRepository,
    service_repo: Optional[ServiceRepository] = None,
) -> List[LineItem]:
    """
    Validate submitted lines and fill omitted fields from the catalog

    Args:
        lines: Submitted lines
        menu_item_repo: Menu item catalog
        service_repo: Service catalog; None when services are not allowed

    Returns:
        Parsed LineItems in submission order

    Raises:
        InvalidLineItem: If a line is malformed
        UnknownCatalogReference: If a referenced catalog entry does not exist
    """
    for index, line in enumerate(lines):
        if line.menu_item_id is not None and line.service_id is not None:
            raise InvalidLineItem(index, "reference", "must name a menu item or a service, not both")
        if line.service_id is not None and service_repo is None:
            raise InvalidLineItem(index, "service_id", "is not allowed here")

    menu_items = await menu_item_repo.get_by_ids(
        line.menu_item_id for line in lines if line.menu_item_id is not None
    )
    services: Dict[int, Any] = {}
    if service_repo is not None:
        services = await service_repo.get_by_ids(
            line.service_id for line in lines if line.service_id is not None
        )

    items = []
    for index, line in enumerate(lines):
        catalog_entry = None
        kind = ReferenceKind.NONE
        reference_id = None

        if line.menu_item_id is not None:
            kind, reference_id = ReferenceKind.MENU_ITEM, line.menu_item_id
            catalog_entry = menu_items.get(reference_id)
        elif line.service_id is not None:
            kind, reference_id = ReferenceKind.SERVICE, line.service_id
            catalog_entry = services.get(reference_id)

        if reference_id is not None and catalog_entry is None:
            raise UnknownCatalogReference(index, kind, reference_id)

        items.append(
            parse_line_item(
                index,
                name=_pick(line.name, catalog_entry.name if catalog_entry else None),
                quantity=line.quantity,
                rate=_pick(line.rate, catalog_entry.price if catalog_entry else None),
                tax_percentage=_pick(
                    line.tax_percentage, catalog_entry.tax_percentage if catalog_entry else None
                ),
                reference_kind=kind,
                reference_id=reference_id,
                booking_date=line.booking_date,
            )
        )
    return items
