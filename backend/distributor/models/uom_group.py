from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from distributor.models.base import Base


class UOMGroup(Base):
    """Unit of measure group (e.g. Weight, Volume, Count)"""
    __tablename__ = "uom_groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(250), nullable=True)
    created_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<UOMGroup {self.name}>"
