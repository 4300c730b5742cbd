"""
Sales Employee routes
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, List
from distributor.api.deps import get_db
from distributor.models.sales_employee import SalesEmployee
from distributor.schemas.sales_employee import (
    SalesEmployeeCreate,
    SalesEmployeeUpdate,
    SalesEmployeeResponse,
)
from distributor.api.utils import (
    get_by_id, validate_unique, ensure_id_matches, delete_entity,
    apply_search_filter, update_entity
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=SalesEmployeeResponse, status_code=201)
def create_sales_employee(
    employee: SalesEmployeeCreate,
    db: Session = Depends(get_db)
):
    validate_unique(db, SalesEmployee, "name", employee.name, display_name="Sales employee")

    db_employee = SalesEmployee(**employee.model_dump())
    db.add(db_employee)
    db.commit()
    db.refresh(db_employee)
    logger.info(f"Sales employee '{db_employee.name}' created (ID: {db_employee.id})")
    return db_employee


@router.get("/", response_model=List[SalesEmployeeResponse])
def list_sales_employees(
    search_term: Optional[str] = Query(None, description="Search by name"),
    db: Session = Depends(get_db)
):
    query = apply_search_filter(db.query(SalesEmployee), search_term, SalesEmployee.name)
    return query.order_by(SalesEmployee.name).all()


@router.get("/{employee_id}", response_model=SalesEmployeeResponse)
def get_sales_employee(
    employee_id: int,
    db: Session = Depends(get_db)
):
    return get_by_id(db, SalesEmployee, employee_id, error_message=f"Sales employee with ID {employee_id} not found.")


@router.put("/{employee_id}", response_model=SalesEmployeeResponse)
def update_sales_employee(
    employee_id: int,
    employee_update: SalesEmployeeUpdate,
    db: Session = Depends(get_db)
):
    ensure_id_matches(employee_id, employee_update.id)
    employee = get_by_id(db, SalesEmployee, employee_id, error_message=f"Sales employee with ID {employee_id} not found.")
    validate_unique(db, SalesEmployee, "name", employee_update.name, exclude_id=employee_id, display_name="Sales employee")

    return update_entity(db, employee, employee_update, exclude_fields=["id"])


@router.delete("/{employee_id}", status_code=204)
def delete_sales_employee(
    employee_id: int,
    db: Session = Depends(get_db)
):
    employee = get_by_id(db, SalesEmployee, employee_id, error_message=f"Sales employee with ID {employee_id} not found.")
    delete_entity(db, employee, "Could not delete sales employee.")
    logger.info(f"Sales employee {employee_id} deleted")
    return None
