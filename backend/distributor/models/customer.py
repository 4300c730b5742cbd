from sqlalchemy import Column, Integer, String, Numeric, Index
from sqlalchemy.orm import relationship
from distributor.models.base import Base


class CustomerGroup(Base):
    """
    Grouping used to classify customers

    Examples:
    - Retail
    - Wholesale
    - Modern Trade
    """
    __tablename__ = "customer_groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<CustomerGroup {self.name}>"


class Customer(Base):
    """
    Customer master record

    The group is stored by name, matching a CustomerGroup row at write time.
    """
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)

    # Identification
    code = Column(String(50), nullable=False)
    name = Column(String(200), nullable=False)
    group = Column(String(100), nullable=True)

    # Commercial
    balance = Column(Numeric(18, 2), nullable=False, default=0)
    route = Column(String(100), nullable=True)
    employee = Column(String(100), nullable=True)
    remarks = Column(String(500), nullable=True)
    shipping_type = Column(String(50), nullable=True)
    gstin = Column(String(15), nullable=True)

    # Contact
    contact_number = Column(String(25), nullable=True)
    mail_id = Column(String(100), nullable=True)

    # Address
    address1 = Column(String(255), nullable=True)
    address2 = Column(String(255), nullable=True)
    street = Column(String(100), nullable=True)
    post_box = Column(String(20), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)

    # Relationships
    # The FK must block the delete instead of being nulled by the ORM
    sales_orders = relationship("SalesOrder", back_populates="customer", passive_deletes="all")

    def __repr__(self):
        return f"<Customer {self.code} - {self.name}>"

    __table_args__ = (
        Index('idx_customers_code', 'code'),
        Index('idx_customers_name', 'name'),
    )
