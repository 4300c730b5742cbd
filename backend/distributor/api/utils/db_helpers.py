"""
Database Helpers - shared lookups and pre-checks used by every router
"""
from typing import Type, TypeVar, Optional, Any
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from distributor.api.errors import field_error, problem
from fastapi import HTTPException

T = TypeVar('T')


def get_by_id(
    db: Session,
    model: Type[T],
    entity_id: Any,
    error_message: str = None,
    options: list = None
) -> T:
    """
    Fetch an entity by primary key.

    Args:
        db: Database session
        model: SQLAlchemy model class
        entity_id: Primary key value
        error_message: Custom 404 message (optional)
        options: Loader options such as selectinload (optional)

    Returns:
        The entity

    Raises:
        HTTPException 404 when the entity is missing

    Usage:
        customer = get_by_id(db, Customer, customer_id)
        order = get_by_id(db, SalesOrder, order_id, options=[selectinload(SalesOrder.items)])
    """
    query = db.query(model).filter(model.id == entity_id)

    if options:
        for opt in options:
            query = query.options(opt)

    entity = query.first()

    if not entity:
        msg = error_message or f"{model.__name__} with ID {entity_id} not found."
        raise HTTPException(status_code=404, detail=problem(404, msg))

    return entity


def validate_unique(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
    exclude_id: Any = None,
    display_name: str = None
) -> None:
    """
    Reject a value that already exists on another row, ignoring case.

    This is a pre-check only: two concurrent writers can both pass it.

    Args:
        db: Database session
        model: Model class
        field_name: Column to check
        field_value: Candidate value
        exclude_id: Row to ignore (the entity being updated)
        display_name: Label for the error message

    Raises:
        HTTPException 409 with a field-level error when the value is taken

    Usage:
        validate_unique(db, Customer, "code", customer.code, display_name="Customer code")
        validate_unique(db, UOMGroup, "name", name, exclude_id=uom_group_id)
    """
    if field_value is None:
        return

    field = getattr(model, field_name)
    query = db.query(model).filter(func.lower(field) == str(field_value).lower())

    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)

    if query.first():
        name = display_name or field_name
        raise field_error(409, field_name, f"{name} '{field_value}' already exists.")


def validate_reference(
    db: Session,
    model: Type[T],
    field_name: str,
    value: Optional[str],
    display_name: str = None
) -> Optional[T]:
    """
    Check that a by-name reference (e.g. a customer's group) points to an
    existing row of `model`.

    Raises:
        HTTPException 400 with a field-level error when no row has that name

    Usage:
        validate_reference(db, CustomerGroup, "group", customer.group, "Customer group")
    """
    if not value:
        return None

    entity = db.query(model).filter(func.lower(model.name) == value.lower()).first()
    if not entity:
        name = display_name or model.__name__
        raise field_error(400, field_name, f"{name} '{value}' is not valid or does not exist.")

    return entity


def ensure_id_matches(path_id: Any, body_id: Any) -> None:
    """Reject an update whose body id differs from the id in the URL"""
    if body_id != path_id:
        raise field_error(400, "id", "The ID in the URL does not match the ID in the request body.")


def delete_entity(db: Session, entity: Any, error_message: str) -> None:
    """
    Delete and commit; a foreign-key violation becomes a 409 with `error_message`.

    Usage:
        delete_entity(db, customer, "Could not delete customer. It is referenced by other records.")
    """
    try:
        db.delete(entity)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        details = str(getattr(exc, "orig", None) or exc)
        raise HTTPException(
            status_code=409,
            detail=problem(409, error_message, {"delete": [f"{error_message} Details: {details}"]})
        )
