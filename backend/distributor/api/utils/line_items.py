"""
Line item helpers

Orders arrive as multipart forms (they carry files), so the item list is a
JSON string field rather than part of a typed body.
"""
from decimal import Decimal
from typing import List, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from distributor.api.errors import field_error, problem
from distributor.schemas.order_common import OrderItemIn
from fastapi import HTTPException

T = TypeVar('T')

ITEMS_FIELD = "items_json"

_items_adapter = TypeAdapter(List[OrderItemIn])


def parse_items_json(raw: Optional[str], required: bool = True) -> Optional[List[OrderItemIn]]:
    """
    Parse and validate the items JSON form field.

    Args:
        raw: JSON array string as received
        required: Create requires a non-empty list; update treats a missing
            field as "leave items alone" and accepts an empty list

    Returns:
        Parsed items, or None when the field is absent and not required

    Raises:
        HTTPException 400 when missing/empty (if required), malformed or invalid
    """
    if raw is None or not raw.strip():
        if required:
            raise field_error(400, ITEMS_FIELD, "Line items JSON is required.")
        return None

    try:
        items = _items_adapter.validate_json(raw)
    except ValidationError as exc:
        messages = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()))
            messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg"))
        raise HTTPException(
            status_code=400,
            detail=problem(400, "Invalid format for line items JSON.", {ITEMS_FIELD: messages})
        )

    if required and not items:
        raise field_error(400, ITEMS_FIELD, "Line items list cannot be empty.")

    return items


def build_items(model: Type[T], items: List[OrderItemIn]) -> List[T]:
    """Create one `model` row per parsed item"""
    return [model(**item.model_dump()) for item in items]


def order_total(items) -> Decimal:
    """Sum of the stored line totals"""
    return sum((item.total or Decimal(0) for item in items), Decimal(0))


def item_response(item) -> dict:
    return {
        "id": item.id,
        "product_code": item.product_code,
        "product_name": item.product_name,
        "quantity": item.quantity,
        "uom": item.uom,
        "price": item.price,
        "warehouse_location": item.warehouse_location,
        "tax_code": item.tax_code,
        "tax_price": item.tax_price,
        "total": item.total,
    }
