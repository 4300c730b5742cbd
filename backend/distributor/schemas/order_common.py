"""
Schemas shared by Sales Orders and Purchase Orders: line items and attachments
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID


def _fold(key: str) -> str:
    return key.replace("_", "").lower()


class OrderItemIn(BaseModel):
    """
    One line of the items JSON sent with the multipart form.
    Keys match regardless of case or underscores: product_code, productCode
    and ProductCode are the same field. Unknown keys (e.g. a line id echoed
    back by the client) are ignored.
    total is stored as sent (quantity * price + tax_price on the client).
    Negative quantities and prices are allowed for credit or return lines.
    """
    product_code: Optional[str] = Field(None, max_length=50)
    product_name: Optional[str] = Field(None, max_length=255)
    quantity: Decimal = Decimal(0)
    uom: Optional[str] = Field(None, max_length=20)
    price: Decimal = Decimal(0)
    warehouse_location: Optional[str] = Field(None, max_length=100)
    tax_code: Optional[str] = Field(None, max_length=50)
    tax_price: Decimal = Decimal(0)
    total: Decimal = Decimal(0)

    @model_validator(mode="before")
    @classmethod
    def fold_keys(cls, data):
        """Map any spelling of a field name onto the field"""
        if not isinstance(data, dict):
            return data
        return {_ITEM_KEYS.get(_fold(key), key): value for key, value in data.items()}


_ITEM_KEYS = {_fold(name): name for name in OrderItemIn.model_fields}


class OrderItemResponse(BaseModel):
    id: UUID
    product_code: Optional[str] = None
    product_name: Optional[str] = None
    quantity: Decimal
    uom: Optional[str] = None
    price: Decimal
    warehouse_location: Optional[str] = None
    tax_code: Optional[str] = None
    tax_price: Decimal
    total: Decimal

    class Config:
        from_attributes = True


class AttachmentResponse(BaseModel):
    id: UUID
    file_name: str
    content_type: str
    file_size: int
    uploaded_date: datetime
    download_url: str
