from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal


class TaxDeclarationBase(BaseModel):
    """Base schema for TaxDeclaration"""
    tax_code: str = Field(..., min_length=1, max_length=50, description="Code used on order lines")
    tax_description: str = Field(..., min_length=1, max_length=255)
    valid_from: datetime
    valid_to: datetime
    cgst: Optional[Decimal] = Field(None, ge=0, le=100, description="Central GST %")
    sgst: Optional[Decimal] = Field(None, ge=0, le=100, description="State GST %")
    igst: Optional[Decimal] = Field(None, ge=0, le=100, description="Integrated GST %")
    total_percentage: Decimal = Field(..., ge=0, le=100, description="Total tax %")
    is_active: bool = True

    @field_validator('tax_code')
    @classmethod
    def strip_tax_code(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Tax code cannot be empty.')
        return v

    @field_validator('valid_to')
    @classmethod
    def validate_validity_window(cls, v, info):
        """valid_to cannot be before valid_from"""
        valid_from = info.data.get('valid_from')
        if valid_from is not None and v < valid_from:
            raise ValueError('Valid To date must be on or after the Valid From date')
        return v


class TaxDeclarationCreate(TaxDeclarationBase):
    pass


class TaxDeclarationUpdate(TaxDeclarationBase):
    """Schema for updating a tax declaration; the id must match the URL"""
    id: int


class TaxDeclarationResponse(TaxDeclarationBase):
    id: int

    class Config:
        from_attributes = True
