from pydantic import BaseModel, Field


class SalesEmployeeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=150, description="Sales employee name")


class SalesEmployeeCreate(SalesEmployeeBase):
    pass


class SalesEmployeeUpdate(SalesEmployeeBase):
    id: int


class SalesEmployeeResponse(SalesEmployeeBase):
    id: int

    class Config:
        from_attributes = True
