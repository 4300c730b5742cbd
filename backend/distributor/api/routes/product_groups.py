"""
Product Group routes
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from distributor.api.deps import get_db
from distributor.models.product import ProductGroup
from distributor.schemas.product import (
    ProductGroupCreate,
    ProductGroupUpdate,
    ProductGroupResponse,
)
from distributor.api.utils import (
    get_by_id, validate_unique, ensure_id_matches, delete_entity,
    apply_search_filter, update_entity
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=ProductGroupResponse, status_code=201)
def create_product_group(
    group: ProductGroupCreate,
    db: Session = Depends(get_db)
):
    """Create a new product group"""
    validate_unique(db, ProductGroup, "name", group.name, display_name="Product group")

    db_group = ProductGroup(**group.model_dump())
    db.add(db_group)
    db.commit()
    db.refresh(db_group)
    logger.info(f"Product group '{db_group.name}' created (ID: {db_group.id})")
    return db_group


@router.get("/", response_model=List[ProductGroupResponse])
def list_product_groups(
    search_term: Optional[str] = Query(None, description="Search by name"),
    db: Session = Depends(get_db)
):
    query = apply_search_filter(db.query(ProductGroup), search_term, ProductGroup.name)
    return query.order_by(ProductGroup.name).all()


@router.get("/{group_id}", response_model=ProductGroupResponse)
def get_product_group(
    group_id: int,
    db: Session = Depends(get_db)
):
    return get_by_id(db, ProductGroup, group_id, error_message=f"Product group with ID {group_id} not found.")


@router.put("/{group_id}", response_model=ProductGroupResponse)
def update_product_group(
    group_id: int,
    group_update: ProductGroupUpdate,
    db: Session = Depends(get_db)
):
    ensure_id_matches(group_id, group_update.id)
    group = get_by_id(db, ProductGroup, group_id, error_message=f"Product group with ID {group_id} not found.")
    validate_unique(db, ProductGroup, "name", group_update.name, exclude_id=group_id, display_name="Product group")

    return update_entity(db, group, group_update, exclude_fields=["id"])


@router.delete("/{group_id}", status_code=204)
def delete_product_group(
    group_id: int,
    db: Session = Depends(get_db)
):
    group = get_by_id(db, ProductGroup, group_id, error_message=f"Product group with ID {group_id} not found.")
    delete_entity(db, group, "Could not delete product group.")
    logger.info(f"Product group {group_id} deleted")
    return None
