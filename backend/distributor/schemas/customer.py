from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from decimal import Decimal


# ============ CUSTOMER GROUP ============

class CustomerGroupBase(BaseModel):
    """Base schema for CustomerGroup"""
    name: str = Field(..., min_length=1, max_length=100, description="Group name")


class CustomerGroupCreate(CustomerGroupBase):
    pass


class CustomerGroupUpdate(CustomerGroupBase):
    id: int


class CustomerGroupResponse(CustomerGroupBase):
    id: int

    class Config:
        from_attributes = True


# ============ CUSTOMER ============

class CustomerBase(BaseModel):
    """Base schema for Customer"""
    code: str = Field(..., min_length=1, max_length=50, description="Customer code")
    name: str = Field(..., min_length=1, max_length=200, description="Customer name")
    group: Optional[str] = Field(None, max_length=100, description="Customer group name")
    balance: Decimal = Field(Decimal(0), description="Opening/current balance")
    route: Optional[str] = Field(None, max_length=100)
    employee: Optional[str] = Field(None, max_length=100, description="Assigned sales employee")
    remarks: Optional[str] = Field(None, max_length=500)
    contact_number: Optional[str] = Field(None, max_length=25)
    mail_id: Optional[EmailStr] = Field(None, description="Contact e-mail")
    shipping_type: Optional[str] = Field(None, max_length=50)
    address1: Optional[str] = Field(None, max_length=255)
    address2: Optional[str] = Field(None, max_length=255)
    street: Optional[str] = Field(None, max_length=100)
    post_box: Optional[str] = Field(None, max_length=20)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    gstin: Optional[str] = Field(None, max_length=15, description="GST identification number")


class CustomerCreate(CustomerBase):
    """Schema for creating a customer"""
    pass


class CustomerUpdate(CustomerBase):
    """Schema for updating a customer; the id must match the URL"""
    id: int


class CustomerResponse(CustomerBase):
    """API response schema"""
    id: int
    mail_id: Optional[str] = None

    class Config:
        from_attributes = True
