"""
Customer routes
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from distributor.api.deps import get_db
from distributor.models.customer import Customer, CustomerGroup
from distributor.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
)
from distributor.api.utils import (
    get_by_id, validate_unique, validate_reference, ensure_id_matches,
    delete_entity, apply_search_filter, apply_iexact_filter, update_entity
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=CustomerResponse, status_code=201)
def create_customer(
    customer: CustomerCreate,
    db: Session = Depends(get_db)
):
    """Create a new customer"""
    validate_unique(db, Customer, "code", customer.code, display_name="Customer code")
    validate_reference(db, CustomerGroup, "group", customer.group, "Customer group")

    db_customer = Customer(**customer.model_dump())
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    logger.info(f"Customer {db_customer.code} created (ID: {db_customer.id})")
    return db_customer


@router.get("/", response_model=List[CustomerResponse])
def list_customers(
    group: Optional[str] = Query(None, description="Exact group name, case-insensitive"),
    search_term: Optional[str] = Query(None, description="Search by name or code"),
    db: Session = Depends(get_db)
):
    """List customers with optional filters"""
    query = db.query(Customer)
    query = apply_iexact_filter(query, group, Customer.group)
    query = apply_search_filter(query, search_term, Customer.name, Customer.code)
    return query.order_by(Customer.name).all()


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    db: Session = Depends(get_db)
):
    """Get a single customer"""
    return get_by_id(db, Customer, customer_id, error_message=f"Customer with ID {customer_id} not found.")


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    customer_update: CustomerUpdate,
    db: Session = Depends(get_db)
):
    """Update an existing customer"""
    ensure_id_matches(customer_id, customer_update.id)
    customer = get_by_id(db, Customer, customer_id, error_message=f"Customer with ID {customer_id} not found.")

    validate_unique(db, Customer, "code", customer_update.code, exclude_id=customer_id, display_name="Customer code")
    validate_reference(db, CustomerGroup, "group", customer_update.group, "Customer group")

    customer = update_entity(db, customer, customer_update, exclude_fields=["id"])
    logger.info(f"Customer {customer.code} updated (ID: {customer.id})")
    return customer


@router.delete("/{customer_id}", status_code=204)
def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db)
):
    """Delete a customer (blocked while orders reference it)"""
    customer = get_by_id(db, Customer, customer_id, error_message=f"Customer with ID {customer_id} not found.")
    delete_entity(
        db, customer,
        "Could not delete customer. They might be associated with other records (e.g., orders)."
    )
    logger.info(f"Customer {customer_id} deleted")
    return None
