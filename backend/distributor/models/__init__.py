"""
System models

Importing this package registers every table on Base.metadata
"""

from distributor.models.base import Base, TimestampMixin
from distributor.models.document_sequence import DocumentSequence
from distributor.models.customer import Customer, CustomerGroup
from distributor.models.product import Product, ProductGroup
from distributor.models.uom_group import UOMGroup
from distributor.models.sales_employee import SalesEmployee
from distributor.models.tax_declaration import TaxDeclaration
from distributor.models.sales_order import (
    SalesOrder,
    SalesOrderItem,
    SalesOrderAttachment,
)
from distributor.models.purchase_order import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderAttachment,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "DocumentSequence",
    "Customer",
    "CustomerGroup",
    "Product",
    "ProductGroup",
    "UOMGroup",
    "SalesEmployee",
    "TaxDeclaration",
    "SalesOrder",
    "SalesOrderItem",
    "SalesOrderAttachment",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "PurchaseOrderAttachment",
]
