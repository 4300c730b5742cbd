"""
Sales Order routes

Orders are posted as multipart/form-data: header fields as form fields, the
line items as a JSON string (items_json) and any number of uploaded_files.
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
    item_response, next_sales_order_number, parse_optional_datetime
)
from distributor.api.utils.attachments import (
    SALES_ORDER_FOLDER, save_uploads, delete_stored_file, discard_stored_files,
    stored_file_path, attachment_response
)
from distributor.config import settings
from distributor.models.customer import Customer
from distributor.models.sales_order import SalesOrder, SalesOrderItem, SalesOrderAttachment
from distributor.schemas.sales_order import SalesOrderResponse

router = APIRouter()
logger = logging.getLogger(__name__)

CONCURRENCY_MESSAGE = (
    "The sales order was modified by another user after you loaded it. "
    "Reload the order and apply your changes again."
)

_LOAD_OPTIONS = [selectinload(SalesOrder.items), selectinload(SalesOrder.attachments)]

DATE_FIELDS = ("so_date", "delivery_date")


class SalesOrderForm:
    """Header fields of the sales order multipart form"""

    def __init__(
        self,
        customer_code: Optional[str] = Form(None),
        customer_name: Optional[str] = Form(None),
        so_date: Optional[str] = Form(None),
        delivery_date: Optional[str] = Form(None),
        document_details: Optional[str] = Form(None),
        customer_ref_number: Optional[str] = Form(None),
        ship_to_address: Optional[str] = Form(None),
        sales_remarks: Optional[str] = Form(None),
        sales_employee: Optional[str] = Form(None),
        items_json: Optional[str] = Form(None),
    ):
        self.customer_code = customer_code
        self.customer_name = customer_name
        self.so_date = so_date
        self.delivery_date = delivery_date
        self.document_details = document_details
        self.customer_ref_number = customer_ref_number
        self.ship_to_address = ship_to_address
        self.sales_remarks = sales_remarks
        self.sales_employee = sales_employee
        self.items_json = items_json

    def header(self, only_provided: bool = False) -> dict:
        """Header values ready for the model; dates are parsed leniently"""
        fields = (
            "customer_code", "customer_name", "so_date", "delivery_date",
            "document_details", "customer_ref_number", "ship_to_address",
            "sales_remarks", "sales_employee",
        )
        data = {}
        for field in fields:
            value = getattr(self, field)
            if only_provided and value is None:
                continue
            if field in DATE_FIELDS:
                value = parse_optional_datetime(value)
            data[field] = value
        return data


def _sales_order_response(order: SalesOrder) -> dict:
    download_base = f"{settings.API_PREFIX}/SalesOrders/attachment"
    return {
        "id": order.id,
        "sales_order_no": order.sales_order_no,
        "customer_id": order.customer_id,
        "customer_code": order.customer_code,
        "customer_name": order.customer_name,
        "so_date": order.so_date,
        "delivery_date": order.delivery_date,
        "document_details": order.document_details,
        "customer_ref_number": order.customer_ref_number,
        "ship_to_address": order.ship_to_address,
        "sales_remarks": order.sales_remarks,
        "sales_employee": order.sales_employee,
        "created_date": order.created_date,
        "modified_date": order.modified_date,
        "row_version": order.row_version,
        "order_total": order_total(order.items),
        "items": [item_response(item) for item in order.items],
        "attachments": [attachment_response(att, download_base) for att in order.attachments],
    }


def _find_customer(db: Session, customer_code: Optional[str]) -> Optional[Customer]:
    if not customer_code:
        return None
    return db.query(Customer).filter(Customer.code == customer_code).first()


def _attachments(stored_files) -> List[SalesOrderAttachment]:
    return [
        SalesOrderAttachment(
            file_name=stored.file_name,
            stored_file_name=stored.stored_file_name,
            content_type=stored.content_type,
            file_size=stored.file_size,
        )
        for stored in stored_files
    ]


def _conflict() -> HTTPException:
    return HTTPException(status_code=409, detail=problem(409, CONCURRENCY_MESSAGE))


@router.get("/", response_model=List[SalesOrderResponse])
def list_sales_orders(
    sales_order_no: Optional[str] = Query(None, description="Search by order number"),
    customer_name: Optional[str] = Query(None, description="Search by customer name"),
    db: Session = Depends(get_db)
):
    """List sales orders, newest first"""
    query = db.query(SalesOrder).options(*_LOAD_OPTIONS)
    query = apply_search_filter(query, sales_order_no, SalesOrder.sales_order_no)
    query = apply_search_filter(query, customer_name, SalesOrder.customer_name)
    orders = query.order_by(SalesOrder.created_date.desc(), SalesOrder.sales_order_no.desc()).all()
    return [_sales_order_response(order) for order in orders]


@router.get("/attachment/{attachment_id}")
def download_sales_order_attachment(
    attachment_id: UUID,
    db: Session = Depends(get_db)
):
    """Download an attachment with its original name and content type"""
    attachment = db.query(SalesOrderAttachment).filter(SalesOrderAttachment.id == attachment_id).first()
    if not attachment or not attachment.stored_file_name:
        raise HTTPException(status_code=404, detail=problem(404, "Attachment not found."))

    path = stored_file_path(SALES_ORDER_FOLDER, attachment.stored_file_name)
    if not path.is_file():
        logger.warning(f"Attachment {attachment_id} has no file on disk ({path})")
        raise HTTPException(status_code=404, detail=problem(404, "Attachment file not found on server."))

    return FileResponse(path, media_type=attachment.content_type, filename=attachment.file_name)


@router.get("/{order_id}", response_model=SalesOrderResponse)
def get_sales_order(
    order_id: UUID,
    db: Session = Depends(get_db)
):
    """Get a sales order with items and attachments"""
    order = get_by_id(
        db, SalesOrder, order_id,
        error_message=f"Sales order with ID {order_id} not found.",
        options=_LOAD_OPTIONS
    )
    return _sales_order_response(order)


@router.post("/", response_model=SalesOrderResponse, status_code=201)
def create_sales_order(
    form: SalesOrderForm = Depends(),
    uploaded_files: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db)
):
    """
    Create a sales order.

    The order number (SO-NNNNNNN) is minted in the same transaction as the
    insert. customer_id is linked when a customer with customer_code exists.
    """
    items = parse_items_json(form.items_json, required=True)

    order = SalesOrder(**form.header())
    customer = _find_customer(db, order.customer_code)
    if customer:
        order.customer_id = customer.id
        if not order.customer_name:
            order.customer_name = customer.name

    order.items = build_items(SalesOrderItem, items)

    stored = save_uploads(uploaded_files, SALES_ORDER_FOLDER)
    order.attachments = _attachments(stored)

    try:
        order.sales_order_no = next_sales_order_number(db)
        db.add(order)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        discard_stored_files(SALES_ORDER_FOLDER, stored)
        raise

    logger.info(f"Sales order {order.sales_order_no} created (ID: {order.id}, {len(items)} items, {len(stored)} files)")
    return _sales_order_response(order)


@router.put("/{order_id}", response_model=SalesOrderResponse)
def update_sales_order(
    order_id: UUID,
    form: SalesOrderForm = Depends(),
    uploaded_files: Optional[List[UploadFile]] = File(None),
    files_to_delete: Optional[List[UUID]] = Form(None),
    row_version: Optional[int] = Form(None),
    db: Session = Depends(get_db)
):
    """
    Update a sales order.

    Header fields that are sent replace the stored ones. items_json, when
    sent, replaces every line. Attachments listed in files_to_delete are
    removed and uploaded_files are appended. A row_version older than the
    stored one is rejected with 409.
    """
    order = get_by_id(
        db, SalesOrder, order_id,
        error_message=f"Sales order with ID {order_id} not found.",
        options=_LOAD_OPTIONS
    )

    if row_version is not None and row_version != order.row_version:
        logger.warning(f"Sales order {order_id}: stale row_version {row_version} (stored {order.row_version})")
        raise _conflict()

    items = parse_items_json(form.items_json, required=False)

    header = form.header(only_provided=True)
    if "customer_code" in header and header["customer_code"] != order.customer_code:
        customer = _find_customer(db, header["customer_code"])
        order.customer_id = customer.id if customer else None
        if customer and "customer_name" not in header:
            header["customer_name"] = customer.name

    for field, value in header.items():
        setattr(order, field, value)

    if items is not None:
        order.items.clear()
        order.items.extend(build_items(SalesOrderItem, items))

    removed_files = []
    if files_to_delete:
        wanted = set(files_to_delete)
        for attachment in list(order.attachments):
            if attachment.id in wanted:
                removed_files.append(attachment.stored_file_name)
                order.attachments.remove(attachment)

    stored = save_uploads(uploaded_files, SALES_ORDER_FOLDER)
    order.attachments.extend(_attachments(stored))

    # Always emit an UPDATE so the version advances even for item-only edits
    order.modified_date = datetime.utcnow()

    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        discard_stored_files(SALES_ORDER_FOLDER, stored)
        logger.warning(f"Sales order {order_id}: concurrent update detected")
        raise _conflict()
    except SQLAlchemyError:
        db.rollback()
        discard_stored_files(SALES_ORDER_FOLDER, stored)
        raise

    for stored_file_name in removed_files:
        delete_stored_file(SALES_ORDER_FOLDER, stored_file_name)

    logger.info(f"Sales order {order.sales_order_no} updated (ID: {order.id}, version {order.row_version})")
    return _sales_order_response(order)


@router.delete("/{order_id}", status_code=204)
def delete_sales_order(
    order_id: UUID,
    db: Session = Depends(get_db)
):
    """Delete a sales order, its lines, attachments and stored files"""
    order = get_by_id(
        db, SalesOrder, order_id,
        error_message=f"Sales order with ID {order_id} not found.",
        options=_LOAD_OPTIONS
    )

    for attachment in order.attachments:
        delete_stored_file(SALES_ORDER_FOLDER, attachment.stored_file_name)

    try:
        db.delete(order)
        db.commit()
    except StaleDataError:
        db.rollback()
        raise _conflict()

    logger.info(f"Sales order {order_id} deleted")
    return None
