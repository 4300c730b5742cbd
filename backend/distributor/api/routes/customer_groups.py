"""
Customer Group routes
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from distributor.api.deps import get_db
from distributor.models.customer import CustomerGroup
from distributor.schemas.customer import (
    CustomerGroupCreate,
    CustomerGroupUpdate,
    CustomerGroupResponse,
)
from distributor.api.utils import (
    get_by_id, validate_unique, ensure_id_matches, delete_entity,
    apply_search_filter, update_entity
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=CustomerGroupResponse, status_code=201)
def create_customer_group(
    group: CustomerGroupCreate,
    db: Session = Depends(get_db)
):
    """Create a new customer group"""
    validate_unique(db, CustomerGroup, "name", group.name, display_name="Customer group")

    db_group = CustomerGroup(**group.model_dump())
    db.add(db_group)
    db.commit()
    db.refresh(db_group)
    logger.info(f"Customer group '{db_group.name}' created (ID: {db_group.id})")
    return db_group


@router.get("/", response_model=List[CustomerGroupResponse])
def list_customer_groups(
    search_term: Optional[str] = Query(None, description="Search by name"),
    db: Session = Depends(get_db)
):
    """List customer groups"""
    query = apply_search_filter(db.query(CustomerGroup), search_term, CustomerGroup.name)
    return query.order_by(CustomerGroup.name).all()


@router.get("/{group_id}", response_model=CustomerGroupResponse)
def get_customer_group(
    group_id: int,
    db: Session = Depends(get_db)
):
    return get_by_id(db, CustomerGroup, group_id, error_message=f"Customer group with ID {group_id} not found.")


@router.put("/{group_id}", response_model=CustomerGroupResponse)
def update_customer_group(
    group_id: int,
    group_update: CustomerGroupUpdate,
    db: Session = Depends(get_db)
):
    """Rename a customer group"""
    ensure_id_matches(group_id, group_update.id)
    group = get_by_id(db, CustomerGroup, group_id, error_message=f"Customer group with ID {group_id} not found.")
    validate_unique(db, CustomerGroup, "name", group_update.name, exclude_id=group_id, display_name="Customer group")

    return update_entity(db, group, group_update, exclude_fields=["id"])


@router.delete("/{group_id}", status_code=204)
def delete_customer_group(
    group_id: int,
    db: Session = Depends(get_db)
):
    group = get_by_id(db, CustomerGroup, group_id, error_message=f"Customer group with ID {group_id} not found.")
    delete_entity(db, group, "Could not delete customer group.")
    logger.info(f"Customer group {group_id} deleted")
    return None
