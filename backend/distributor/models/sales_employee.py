from sqlalchemy import Column, Integer, String
from distributor.models.base import Base


class SalesEmployee(Base):
    __tablename__ = "sales_employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)

    def __repr__(self):
        return f"<SalesEmployee {self.name}>"
