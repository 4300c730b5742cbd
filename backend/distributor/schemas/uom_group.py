from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class UOMGroupBase(BaseModel):
    name: str = Field(..., max_length=100, description="UOM group name")
    description: Optional[str] = Field(None, max_length=250)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Names are stored trimmed and cannot be blank"""
        v = v.strip()
        if not v:
            raise ValueError('UOM Group name cannot be empty.')
        return v


class UOMGroupCreate(UOMGroupBase):
    pass


class UOMGroupUpdate(UOMGroupBase):
    id: int


class UOMGroupResponse(UOMGroupBase):
    id: int
    created_date: datetime

    class Config:
        from_attributes = True
