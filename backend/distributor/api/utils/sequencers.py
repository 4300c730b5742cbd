"""
Sequencers - sequential document numbers

Numbers come from the 'document_sequences' tracker table, so they NEVER
restart, even when documents are deleted. The tracker row is locked with
SELECT ... FOR UPDATE and incremented inside the caller's transaction: the
number and the document insert commit (or roll back) together.
"""
from sqlalchemy.orm import Session

from distributor.config import settings
from distributor.models.document_sequence import DocumentSequence


def generate_document_number(db: Session, prefix: str, start: int = 0) -> str:
    """
    Mint the next number in the format PREFIX-NNNNNNN.

    Args:
        db: Database session (the caller commits)
        prefix: Document prefix (e.g. "SO", "PO")
        start: Seed for a tracker that does not exist yet; the first number is start + 1

    Returns:
        Formatted number (e.g. "SO-1000001")

    Usage:
        number = generate_document_number(db, Prefixes.SALES_ORDER, 1000000)
        # Returns: "SO-1000001"
    """
    sequence = db.query(DocumentSequence).filter(
        DocumentSequence.prefix == prefix
    ).with_for_update().first()

    if not sequence:
        # First document of this type. A concurrent first insert fails on the
        # unique prefix and surfaces as a database error for that request.
        sequence = DocumentSequence(prefix=prefix, last_used_number=start)
        db.add(sequence)

    sequence.last_used_number += 1
    next_number = sequence.last_used_number

    # Flush so the increment is part of the open transaction
    db.flush()

    return f"{prefix}-{next_number}"


# Document prefixes
class Prefixes:
    SALES_ORDER = "SO"
    PURCHASE_ORDER = "PO"


def next_sales_order_number(db: Session) -> str:
    return generate_document_number(db, Prefixes.SALES_ORDER, settings.SALES_ORDER_NUMBER_START)


def next_purchase_order_number(db: Session) -> str:
    return generate_document_number(db, Prefixes.PURCHASE_ORDER, settings.PURCHASE_ORDER_NUMBER_START)
