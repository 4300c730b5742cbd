from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from distributor.schemas.order_common import OrderItemResponse, AttachmentResponse


class SalesOrderResponse(BaseModel):
    id: UUID
    sales_order_no: Optional[str] = None
    customer_id: Optional[int] = None
    customer_code: Optional[str] = None
    customer_name: Optional[str] = None
    so_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    document_details: Optional[str] = None
    customer_ref_number: Optional[str] = None
    ship_to_address: Optional[str] = None
    sales_remarks: Optional[str] = None
    sales_employee: Optional[str] = None
    created_date: datetime
    modified_date: Optional[datetime] = None
    row_version: int
    order_total: Decimal = Decimal(0)
    items: List[OrderItemResponse] = []
    attachments: List[AttachmentResponse] = []
