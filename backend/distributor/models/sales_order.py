import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, String, Numeric, DateTime, BigInteger, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from distributor.models.base import Base, TimestampMixin


class SalesOrder(Base, TimestampMixin):
    """
    Sales Order document

    Customer code/name are a snapshot taken when the order is written, so
    later edits to the customer do not rewrite history.
    row_version is the optimistic concurrency token.
    """
    __tablename__ = "sales_orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Identification
    sales_order_no = Column(String(50), nullable=True, index=True)  # SO-NNNNNNN

    # Customer
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    customer_code = Column(String(100), nullable=True)
    customer_name = Column(String(255), nullable=True)

    # Dates
    so_date = Column(DateTime, nullable=True)
    delivery_date = Column(DateTime, nullable=True)

    # Additional information
    document_details = Column(String(500), nullable=True)
    customer_ref_number = Column(String(100), nullable=True)
    ship_to_address = Column(String(500), nullable=True)
    sales_remarks = Column(String(1000), nullable=True)
    sales_employee = Column(String(100), nullable=True)

    row_version = Column(Integer, nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="sales_orders")
    items = relationship("SalesOrderItem", back_populates="sales_order", cascade="all, delete-orphan")
    attachments = relationship("SalesOrderAttachment", back_populates="sales_order", cascade="all, delete-orphan")

    __mapper_args__ = {"version_id_col": row_version}

    def __repr__(self):
        return f"<SalesOrder {self.sales_order_no}>"


class SalesOrderItem(Base):
    """
    Sales Order line

    total = quantity * price + tax_price, computed by the client
    """
    __tablename__ = "sales_order_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    sales_order_id = Column(Uuid, ForeignKey("sales_orders.id", ondelete="CASCADE"), nullable=False)

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

    sales_order = relationship("SalesOrder", back_populates="items")


class SalesOrderAttachment(Base):
    """File attached to a Sales Order; the bytes live in the uploads directory"""
    __tablename__ = "sales_order_attachments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    sales_order_id = Column(Uuid, ForeignKey("sales_orders.id", ondelete="CASCADE"), nullable=False)

    file_name = Column(String(255), nullable=False)  # original name
    stored_file_name = Column(String(1024), nullable=False)  # <uuid><ext> on disk
    content_type = Column(String(100), nullable=False)
    file_size = Column(BigInteger, nullable=False, default=0)
    uploaded_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    sales_order = relationship("SalesOrder", back_populates="attachments")
