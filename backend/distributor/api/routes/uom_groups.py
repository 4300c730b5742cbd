"""
UOM Group routes
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from distributor.api.deps import get_db
from distributor.models.uom_group import UOMGroup
from distributor.schemas.uom_group import (
    UOMGroupCreate,
    UOMGroupUpdate,
    UOMGroupResponse,
)
from distributor.api.utils import (
    get_by_id, validate_unique, ensure_id_matches, delete_entity,
    apply_search_filter, update_entity
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=UOMGroupResponse, status_code=201)
def create_uom_group(
    uom_group: UOMGroupCreate,
    db: Session = Depends(get_db)
):
    """Create a new UOM group (name is stored trimmed)"""
    validate_unique(db, UOMGroup, "name", uom_group.name, display_name="UOM Group")

    db_group = UOMGroup(**uom_group.model_dump())
    db.add(db_group)
    db.commit()
    db.refresh(db_group)
    logger.info(f"UOM group '{db_group.name}' created (ID: {db_group.id})")
    return db_group


@router.get("/", response_model=List[UOMGroupResponse])
def list_uom_groups(
    search_term: Optional[str] = Query(None, description="Search by name"),
    db: Session = Depends(get_db)
):
    query = apply_search_filter(db.query(UOMGroup), search_term, UOMGroup.name)
    return query.order_by(UOMGroup.name).all()


@router.get("/{uom_group_id}", response_model=UOMGroupResponse)
def get_uom_group(
    uom_group_id: int,
    db: Session = Depends(get_db)
):
    return get_by_id(db, UOMGroup, uom_group_id, error_message=f"UOM Group with ID {uom_group_id} not found.")


@router.put("/{uom_group_id}", response_model=UOMGroupResponse)
def update_uom_group(
    uom_group_id: int,
    uom_group_update: UOMGroupUpdate,
    db: Session = Depends(get_db)
):
    ensure_id_matches(uom_group_id, uom_group_update.id)
    uom_group = get_by_id(db, UOMGroup, uom_group_id, error_message=f"UOM Group with ID {uom_group_id} not found.")
    validate_unique(db, UOMGroup, "name", uom_group_update.name, exclude_id=uom_group_id, display_name="UOM Group")

    uom_group = update_entity(db, uom_group, uom_group_update, exclude_fields=["id"])
    logger.info(f"UOM group {uom_group_id} updated")
    return uom_group


@router.delete("/{uom_group_id}", status_code=204)
def delete_uom_group(
    uom_group_id: int,
    db: Session = Depends(get_db)
):
    uom_group = get_by_id(db, UOMGroup, uom_group_id, error_message=f"UOM Group with ID {uom_group_id} not found.")
    delete_entity(db, uom_group, "Could not delete UOM Group.")
    logger.info(f"UOM group {uom_group_id} deleted")
    return None
