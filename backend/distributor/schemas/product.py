from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal


# ============ PRODUCT GROUP ============

class ProductGroupBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Group name")


class ProductGroupCreate(ProductGroupBase):
    pass


class ProductGroupUpdate(ProductGroupBase):
    id: int


class ProductGroupResponse(ProductGroupBase):
    id: int

    class Config:
        from_attributes = True


# ============ PRODUCT ============

class ProductBase(BaseModel):
    """Base schema for Product"""
    sku: str = Field(..., min_length=1, max_length=50, description="Stock keeping unit")
    name: str = Field(..., min_length=1, max_length=250, description="Product name")
    group: str = Field(..., min_length=1, max_length=100, description="Product group name")
    uom: str = Field(..., min_length=1, max_length=50, description="Unit of measure")
    hsn: Optional[str] = Field(None, max_length=20, description="HSN tax classification code")
    retail_price: Optional[Decimal] = Field(None, ge=0, description="Retail price")
    wholesale_price: Optional[Decimal] = Field(None, ge=0, description="Wholesale price")
    image_file_name: Optional[str] = Field(None, max_length=255)

    @field_validator('wholesale_price')
    @classmethod
    def validate_wholesale_price(cls, v, info):
        """Wholesale price cannot exceed the retail price"""
        retail = info.data.get('retail_price')
        if v is not None and retail is not None and v > retail:
            raise ValueError('Wholesale price must be less than or equal to the retail price')
        return v


class ProductCreate(ProductBase):
    """Schema for creating a product"""
    pass


class ProductUpdate(ProductBase):
    """Schema for updating a product; the id must match the URL"""
    id: int


class ProductResponse(ProductBase):
    """API response schema"""
    id: int

    class Config:
        from_attributes = True
