"""
Product routes
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from distributor.api.deps import get_db
from distributor.models.product import Product, ProductGroup
from distributor.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)
from distributor.api.utils import (
    get_by_id, validate_unique, validate_reference, ensure_id_matches,
    delete_entity, apply_search_filter, apply_iexact_filter, update_entity
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=ProductResponse, status_code=201)
def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db)
):
    """Create a new product"""
    validate_unique(db, Product, "sku", product.sku, display_name="Product SKU")
    validate_reference(db, ProductGroup, "group", product.group, "Product group")

    db_product = Product(**product.model_dump())
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    logger.info(f"Product {db_product.sku} created (ID: {db_product.id})")
    return db_product


@router.get("/", response_model=List[ProductResponse])
def list_products(
    group: Optional[str] = Query(None, description="Exact group name, case-insensitive"),
    search_term: Optional[str] = Query(None, description="Search by name or SKU"),
    db: Session = Depends(get_db)
):
    """List products with optional filters"""
    query = db.query(Product)
    query = apply_iexact_filter(query, group, Product.group)
    query = apply_search_filter(query, search_term, Product.name, Product.sku)
    return query.order_by(Product.name).all()


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Get a single product"""
    return get_by_id(db, Product, product_id, error_message=f"Product with ID {product_id} not found.")


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_update: ProductUpdate,
    db: Session = Depends(get_db)
):
    """Update an existing product"""
    ensure_id_matches(product_id, product_update.id)
    product = get_by_id(db, Product, product_id, error_message=f"Product with ID {product_id} not found.")

    if product_update.sku != product.sku:
        validate_unique(db, Product, "sku", product_update.sku, exclude_id=product_id, display_name="Product SKU")
    validate_reference(db, ProductGroup, "group", product_update.group, "Product group")

    product = update_entity(db, product, product_update, exclude_fields=["id"])
    logger.info(f"Product {product.sku} updated (ID: {product.id})")
    return product


@router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Delete a product"""
    product = get_by_id(db, Product, product_id, error_message=f"Product with ID {product_id} not found.")
    delete_entity(db, product, "Could not delete product.")
    logger.info(f"Product {product_id} deleted")
    return None
