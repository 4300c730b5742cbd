from sqlalchemy import Column, Integer, String, Numeric, Index
from distributor.models.base import Base


class ProductGroup(Base):
    """Grouping used to classify products"""
    __tablename__ = "product_groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<ProductGroup {self.name}>"


class Product(Base):
    """
    Sellable/purchasable products

    Examples:
    - Sunflower Oil 1L pouch
    - Basmati Rice 5kg bag
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)

    # Identification
    sku = Column(String(50), nullable=False)
    name = Column(String(250), nullable=False)
    group = Column(String(100), nullable=False)  # ProductGroup name

    # Unit of measure and tax classification
    uom = Column(String(50), nullable=False)
    hsn = Column(String(20), nullable=True)

    # Prices
    retail_price = Column(Numeric(18, 2), nullable=True)
    wholesale_price = Column(Numeric(18, 2), nullable=True)

    # Image
    image_file_name = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<Product {self.sku} - {self.name}>"

    __table_args__ = (
        Index('idx_products_sku', 'sku'),
        Index('idx_products_name', 'name'),
        Index('idx_products_group', 'group'),
    )
