from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from distributor.schemas.order_common import OrderItemResponse, AttachmentResponse


class PurchaseOrderListItem(BaseModel):
    """Summary row for the purchase order list"""
    id: UUID
    purchase_order_no: Optional[str] = None
    vendor_code: Optional[str] = None
    vendor_name: Optional[str] = None
    po_date: datetime
    purchase_remarks: Optional[str] = None
    order_total: Decimal = Decimal(0)


class PurchaseOrderResponse(BaseModel):
    id: UUID
    purchase_order_no: Optional[str] = None
    vendor_code: Optional[str] = None
    vendor_name: Optional[str] = None
    po_date: datetime
    delivery_date: Optional[datetime] = None
    vendor_ref_number: Optional[str] = None
    ship_to_address: Optional[str] = None
    purchase_remarks: Optional[str] = None
    created_date: datetime
    modified_date: Optional[datetime] = None
    order_total: Decimal = Decimal(0)
    items: List[OrderItemResponse] = []
    attachments: List[AttachmentResponse] = []
