import uuid
from datetime import datetime
from sqlalchemy import Column, String, Numeric, DateTime, BigInteger, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from distributor.models.base import Base, TimestampMixin


class PurchaseOrder(Base, TimestampMixin):
    """
    Purchase Order document

    Vendor code/name are stored as entered; there is no vendor master here.
    Updates are last-writer-wins.
    """
    __tablename__ = "purchase_orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Identification
    purchase_order_no = Column(String(50), nullable=True, index=True)  # PO-NNNNNNN

    # Vendor
    vendor_code = Column(String(100), nullable=True)
    vendor_name = Column(String(255), nullable=True)

    # Dates
    po_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    delivery_date = Column(DateTime, nullable=True)

    # Additional information
    vendor_ref_number = Column(String(100), nullable=True)
    ship_to_address = Column(String(500), nullable=True)
    purchase_remarks = Column(String(1000), nullable=True)

    # Relationships
    items = relationship("PurchaseOrderItem", back_populates="purchase_order", cascade="all, delete-orphan")
    attachments = relationship("PurchaseOrderAttachment", back_populates="purchase_order", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<PurchaseOrder {self.purchase_order_no}>"


class PurchaseOrderItem(Base):
    """
    Purchase Order line
    """
    __tablename__ = "purchase_order_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    purchase_order_id = Column(Uuid, ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False)

    # Product snapshot
    product_code = Column(String(50), nullable=True)
    product_name = Column(String(255), nullable=True)

    quantity = Column(Numeric(18, 4), nullable=False, default=0)
    uom = Column(String(20), nullable=True)
    price = Column(Numeric(18, 2), nullable=False, default=0)
    warehouse_location = Column(String(100), nullable=True)
    tax_code = Column(String(50), nullable=True)
    tax_price = Column(Numeric(18, 2), nullable=False, default=0)
    total = Column(Numeric(18, 2), nullable=False, default=0)

    purchase_order = relationship("PurchaseOrder", back_populates="items")


class PurchaseOrderAttachment(Base):
    __tablename__ = "purchase_order_attachments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    purchase_order_id = Column(Uuid, ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False)

    file_name = Column(String(255), nullable=False)
    stored_file_name = Column(String(1024), nullable=False)
    content_type = Column(String(100), nullable=False)
    file_size = Column(BigInteger, nullable=False, default=0)
    uploaded_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    purchase_order = relationship("PurchaseOrder", back_populates="attachments")
