import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from distributor.config import settings
from distributor.logging_config import configure_logging
from distributor.api.errors import (
    http_exception_handler,
    validation_exception_handler,
    database_exception_handler,
    io_exception_handler,
)
from distributor.api.routes import (
    customers, customer_groups, products, product_groups, uom_groups,
    sales_employees, tax_declarations, sales_orders, purchase_orders
)

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Problem bodies for every error path
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)
app.add_exception_handler(OSError, io_exception_handler)


@app.get("/health")
def health_check():
    """Health check for monitoring"""
    return {"status": "healthy"}


@app.get("/")
def root():
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }


# Routers
app.include_router(customers.router, prefix=f"{settings.API_PREFIX}/Customer", tags=["Customer"])
app.include_router(customer_groups.router, prefix=f"{settings.API_PREFIX}/CustomerGroups", tags=["CustomerGroups"])
app.include_router(products.router, prefix=f"{settings.API_PREFIX}/Products", tags=["Products"])
app.include_router(product_groups.router, prefix=f"{settings.API_PREFIX}/ProductGroups", tags=["ProductGroups"])
app.include_router(uom_groups.router, prefix=f"{settings.API_PREFIX}/UOMGroups", tags=["UOMGroups"])
app.include_router(sales_employees.router, prefix=f"{settings.API_PREFIX}/SalesEmployee", tags=["SalesEmployee"])
app.include_router(tax_declarations.router, prefix=f"{settings.API_PREFIX}/TaxDeclarations", tags=["TaxDeclarations"])
app.include_router(sales_orders.router, prefix=f"{settings.API_PREFIX}/SalesOrders", tags=["SalesOrders"])
app.include_router(purchase_orders.router, prefix=f"{settings.API_PREFIX}/PurchaseOrders", tags=["PurchaseOrders"])


@app.on_event("startup")
def startup_event():
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} starting ({settings.ENVIRONMENT})")

    from distributor.database import engine
    from distributor.models.base import Base
    # Register every model on the metadata
    import distributor.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")
