"""
Update Helpers - apply request data to entities
"""
from typing import TypeVar, List
from sqlalchemy.orm import Session
from pydantic import BaseModel

T = TypeVar('T')


def update_entity(
    db: Session,
    entity: T,
    update_data: BaseModel,
    exclude_fields: List[str] = None
) -> T:
    """
    Update an entity with the fields sent by the client, then commit and refresh.

    Args:
        db: Database session
        entity: Entity to update
        update_data: Pydantic schema; only fields actually sent are applied
        exclude_fields: Fields to ignore

    Returns:
        The updated entity

    Usage:
        customer = update_entity(db, customer, customer_update, exclude_fields=["id"])
    """
    data = update_data.model_dump(exclude_unset=True)

    if exclude_fields:
        data = {k: v for k, v in data.items() if k not in exclude_fields}

    for field, value in data.items():
        if hasattr(entity, field):
            setattr(entity, field, value)

    db.commit()
    db.refresh(entity)

    return entity
