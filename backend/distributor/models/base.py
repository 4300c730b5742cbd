from sqlalchemy import Column, DateTime
from datetime import datetime
from distributor.database import Base


class TimestampMixin:
    """
    Audit timestamps for documents
    created_date is set on insert, modified_date on every update
    """
    created_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    modified_date = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=True)


# Base is defined in database.py
# Re-exported here for convenience
__all__ = ['Base', 'TimestampMixin']
