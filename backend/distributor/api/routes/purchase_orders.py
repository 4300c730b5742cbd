"""
Purchase Order routes

Same multipart shape as sales orders (items_json + uploaded_files). Updates
are last-writer-wins, but an order deleted by another request while saving
is reported as a conflict.
"""
import logging
from datetime import datetime
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.exc import StaleDataError

from distributor.api.deps import get_db
from distributor.api.errors import problem
from distributor.api.utils import (
    get_by_id, apply_search_filter, parse_items_json, build_items, order_total,
    item_response, next_purchase_order_number, parse_optional_datetime
)
from distributor.api.utils.attachments import (
    PURCHASE_ORDER_FOLDER, save_uploads, delete_stored_file, discard_stored_files,
    stored_file_path, attachment_response
)
from distributor.config import settings
from distributor.models.purchase_order import PurchaseOrder, PurchaseOrderItem, PurchaseOrderAttachment
from distributor.schemas.purchase_order import PurchaseOrderListItem, PurchaseOrderResponse

router = APIRouter()
logger = logging.getLogger(__name__)

_LOAD_OPTIONS = [selectinload(PurchaseOrder.items), selectinload(PurchaseOrder.attachments)]

CONCURRENCY_MESSAGE = (
    "The purchase order was changed or deleted by another user while saving. "
    "Reload the order and apply your changes again."
)


class PurchaseOrderForm:
    """Header fields of the purchase order multipart form"""

    def __init__(
        self,
        vendor_code: Optional[str] = Form(None),
        vendor_name: Optional[str] = Form(None),
        po_date: Optional[str] = Form(None),
        delivery_date: Optional[str] = Form(None),
        vendor_ref_number: Optional[str] = Form(None),
        ship_to_address: Optional[str] = Form(None),
        purchase_remarks: Optional[str] = Form(None),
        items_json: Optional[str] = Form(None),
    ):
        self.vendor_code = vendor_code
        self.vendor_name = vendor_name
        self.po_date = po_date
        self.delivery_date = delivery_date
        self.vendor_ref_number = vendor_ref_number
        self.ship_to_address = ship_to_address
        self.purchase_remarks = purchase_remarks
        self.items_json = items_json

    def header(self, only_provided: bool = False) -> dict:
        data = {
            "vendor_code": self.vendor_code,
            "vendor_name": self.vendor_name,
            "vendor_ref_number": self.vendor_ref_number,
            "ship_to_address": self.ship_to_address,
            "purchase_remarks": self.purchase_remarks,
        }
        if only_provided:
            data = {k: v for k, v in data.items() if v is not None}

        if self.delivery_date is not None or not only_provided:
            data["delivery_date"] = parse_optional_datetime(self.delivery_date)

        # po_date is required on the row: unparseable input keeps the current/default value
        po_date = parse_optional_datetime(self.po_date)
        if po_date is not None:
            data["po_date"] = po_date
        return data


def _purchase_order_response(order: PurchaseOrder) -> dict:
    download_base = f"{settings.API_PREFIX}/PurchaseOrders/attachment"
    return {
        "id": order.id,
        "purchase_order_no": order.purchase_order_no,
        "vendor_code": order.vendor_code,
        "vendor_name": order.vendor_name,
        "po_date": order.po_date,
        "delivery_date": order.delivery_date,
        "vendor_ref_number": order.vendor_ref_number,
        "ship_to_address": order.ship_to_address,
        "purchase_remarks": order.purchase_remarks,
        "created_date": order.created_date,
        "modified_date": order.modified_date,
        "order_total": order_total(order.items),
        "items": [item_response(item) for item in order.items],
        "attachments": [attachment_response(att, download_base) for att in order.attachments],
    }


def _attachments(stored_files) -> List[PurchaseOrderAttachment]:
    return [
        PurchaseOrderAttachment(
            file_name=stored.file_name,
            stored_file_name=stored.stored_file_name,
            content_type=stored.content_type,
            file_size=stored.file_size,
        )
        for stored in stored_files
    ]


@router.get("/", response_model=List[PurchaseOrderListItem])
def list_purchase_orders(
    purchase_order_no: Optional[str] = Query(None, description="Search by order number"),
    vendor_name: Optional[str] = Query(None, description="Search by vendor name"),
    db: Session = Depends(get_db)
):
    """List purchase orders (summary rows), latest PO date first"""
    query = db.query(PurchaseOrder).options(selectinload(PurchaseOrder.items))
    query = apply_search_filter(query, purchase_order_no, PurchaseOrder.purchase_order_no)
    query = apply_search_filter(query, vendor_name, PurchaseOrder.vendor_name)
    orders = query.order_by(PurchaseOrder.po_date.desc()).all()

    return [
        {
            "id": order.id,
            "purchase_order_no": order.purchase_order_no,
            "vendor_code": order.vendor_code,
            "vendor_name": order.vendor_name,
            "po_date": order.po_date,
            "purchase_remarks": order.purchase_remarks,
            "order_total": order_total(order.items),
        }
        for order in orders
    ]


@router.get("/attachment/{attachment_id}")
def download_purchase_order_attachment(
    attachment_id: UUID,
    db: Session = Depends(get_db)
):
    attachment = db.query(PurchaseOrderAttachment).filter(PurchaseOrderAttachment.id == attachment_id).first()
    if not attachment or not attachment.stored_file_name:
        raise HTTPException(status_code=404, detail=problem(404, "Attachment not found."))

    path = stored_file_path(PURCHASE_ORDER_FOLDER, attachment.stored_file_name)
    if not path.is_file():
        logger.warning(f"Attachment {attachment_id} has no file on disk ({path})")
        raise HTTPException(status_code=404, detail=problem(404, "Attachment file not found on server."))

    return FileResponse(path, media_type=attachment.content_type, filename=attachment.file_name)


@router.get("/{order_id}", response_model=PurchaseOrderResponse)
def get_purchase_order(
    order_id: UUID,
    db: Session = Depends(get_db)
):
    order = get_by_id(
        db, PurchaseOrder, order_id,
        error_message=f"Purchase order with ID {order_id} not found.",
        options=_LOAD_OPTIONS
    )
    return _purchase_order_response(order)


@router.post("/", response_model=PurchaseOrderResponse, status_code=201)
def create_purchase_order(
    form: PurchaseOrderForm = Depends(),
    uploaded_files: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db)
):
    """Create a purchase order; the PO-NNNNNNN number is minted with the insert"""
    items = parse_items_json(form.items_json, required=True)

    order = PurchaseOrder(**form.header())
    order.items = build_items(PurchaseOrderItem, items)

    stored = save_uploads(uploaded_files, PURCHASE_ORDER_FOLDER)
    order.attachments = _attachments(stored)

    try:
        order.purchase_order_no = next_purchase_order_number(db)
        db.add(order)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        discard_stored_files(PURCHASE_ORDER_FOLDER, stored)
        raise

    logger.info(f"Purchase order {order.purchase_order_no} created (ID: {order.id}, {len(items)} items, {len(stored)} files)")
    return _purchase_order_response(order)


@router.put("/{order_id}", response_model=PurchaseOrderResponse)
def update_purchase_order(
    order_id: UUID,
    form: PurchaseOrderForm = Depends(),
    uploaded_files: Optional[List[UploadFile]] = File(None),
    files_to_delete: Optional[List[UUID]] = Form(None),
    db: Session = Depends(get_db)
):
    """
    Update a purchase order.

    Header fields that are sent replace the stored ones; items_json, when
    sent, replaces every line.
    """
    order = get_by_id(
        db, PurchaseOrder, order_id,
        error_message=f"Purchase order with ID {order_id} not found.",
        options=_LOAD_OPTIONS
    )

    items = parse_items_json(form.items_json, required=False)

    for field, value in form.header(only_provided=True).items():
        setattr(order, field, value)

    if items is not None:
        order.items.clear()
        order.items.extend(build_items(PurchaseOrderItem, items))

    removed_files = []
    if files_to_delete:
        wanted = set(files_to_delete)
        for attachment in list(order.attachments):
            if attachment.id in wanted:
                removed_files.append(attachment.stored_file_name)
                order.attachments.remove(attachment)

    stored = save_uploads(uploaded_files, PURCHASE_ORDER_FOLDER)
    order.attachments.extend(_attachments(stored))
    order.modified_date = datetime.utcnow()

    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        discard_stored_files(PURCHASE_ORDER_FOLDER, stored)
        logger.warning(f"Purchase order {order_id}: concurrent update detected")
        raise HTTPException(status_code=409, detail=problem(409, CONCURRENCY_MESSAGE))
    except SQLAlchemyError:
        db.rollback()
        discard_stored_files(PURCHASE_ORDER_FOLDER, stored)
        raise

    for stored_file_name in removed_files:
        delete_stored_file(PURCHASE_ORDER_FOLDER, stored_file_name)

    logger.info(f"Purchase order {order.purchase_order_no} updated (ID: {order.id})")
    return _purchase_order_response(order)


@router.delete("/{order_id}", status_code=204)
def delete_purchase_order(
    order_id: UUID,
    db: Session = Depends(get_db)
):
    order = get_by_id(
        db, PurchaseOrder, order_id,
        error_message=f"Purchase order with ID {order_id} not found.",
        options=_LOAD_OPTIONS
    )

    for attachment in order.attachments:
        delete_stored_file(PURCHASE_ORDER_FOLDER, attachment.stored_file_name)

    db.delete(order)
    db.commit()

    logger.info(f"Purchase order {order_id} deleted")
    return None
