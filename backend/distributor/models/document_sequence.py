"""
Tracker rows for sequential document numbers
Numbers are never reused, even when the documents are deleted
"""
from sqlalchemy import Column, Integer, String
from distributor.models.base import Base


class DocumentSequence(Base):
    """
    Holds the last number handed out for one document prefix.
    This table must NEVER be cleared, otherwise numbers would repeat.
    """
    __tablename__ = "document_sequences"

    id = Column(Integer, primary_key=True, index=True)
    prefix = Column(String(10), nullable=False, unique=True)  # SO, PO
    last_used_number = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<DocumentSequence {self.prefix}={self.last_used_number}>"
