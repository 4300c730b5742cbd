"""
Tax Declaration routes
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from distributor.api.deps import get_db
from distributor.models.tax_declaration import TaxDeclaration
from distributor.schemas.tax_declaration import (
    TaxDeclarationCreate,
    TaxDeclarationUpdate,
    TaxDeclarationResponse,
)
from distributor.api.utils import (
    get_by_id, validate_unique, ensure_id_matches, delete_entity,
    apply_search_filter, update_entity
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=TaxDeclarationResponse, status_code=201)
def create_tax_declaration(
    declaration: TaxDeclarationCreate,
    db: Session = Depends(get_db)
):
    """Create a new tax declaration"""
    validate_unique(db, TaxDeclaration, "tax_code", declaration.tax_code, display_name="Tax code")

    db_declaration = TaxDeclaration(**declaration.model_dump())
    db.add(db_declaration)
    db.commit()
    db.refresh(db_declaration)
    logger.info(f"Tax declaration {db_declaration.tax_code} created (ID: {db_declaration.id})")
    return db_declaration


@router.get("/", response_model=List[TaxDeclarationResponse])
def list_tax_declarations(
    search_term: Optional[str] = Query(None, description="Search by tax code or description"),
    is_active: Optional[bool] = Query(None, description="Only active (true) or inactive (false)"),
    db: Session = Depends(get_db)
):
    """List tax declarations ordered by code"""
    query = apply_search_filter(
        db.query(TaxDeclaration), search_term, TaxDeclaration.tax_code, TaxDeclaration.tax_description
    )
    if is_active is not None:
        query = query.filter(TaxDeclaration.is_active == is_active)
    return query.order_by(TaxDeclaration.tax_code).all()


@router.get("/{declaration_id}", response_model=TaxDeclarationResponse)
def get_tax_declaration(
    declaration_id: int,
    db: Session = Depends(get_db)
):
    return get_by_id(
        db, TaxDeclaration, declaration_id,
        error_message=f"Tax declaration with ID {declaration_id} not found."
    )


@router.put("/{declaration_id}", response_model=TaxDeclarationResponse)
def update_tax_declaration(
    declaration_id: int,
    declaration_update: TaxDeclarationUpdate,
    db: Session = Depends(get_db)
):
    """Update a tax declaration"""
    ensure_id_matches(declaration_id, declaration_update.id)
    declaration = get_by_id(
        db, TaxDeclaration, declaration_id,
        error_message=f"Tax declaration with ID {declaration_id} not found."
    )
    validate_unique(
        db, TaxDeclaration, "tax_code", declaration_update.tax_code,
        exclude_id=declaration_id, display_name="Tax code"
    )

    declaration = update_entity(db, declaration, declaration_update, exclude_fields=["id"])
    logger.info(f"Tax declaration {declaration.tax_code} updated (ID: {declaration.id})")
    return declaration


@router.delete("/{declaration_id}", status_code=204)
def delete_tax_declaration(
    declaration_id: int,
    db: Session = Depends(get_db)
):
    declaration = get_by_id(
        db, TaxDeclaration, declaration_id,
        error_message=f"Tax declaration with ID {declaration_id} not found."
    )
    delete_entity(db, declaration, "Could not delete tax declaration.")
    logger.info(f"Tax declaration {declaration_id} deleted")
    return None
