# API Utilities - shared helpers for the routers
from distributor.api.utils.db_helpers import (
    get_by_id, validate_unique, validate_reference, ensure_id_matches, delete_entity
)
from distributor.api.utils.filters import apply_search_filter, apply_iexact_filter
from distributor.api.utils.sequencers import (
    generate_document_number,
    next_sales_order_number,
    next_purchase_order_number,
    Prefixes,
)
from distributor.api.utils.updates import update_entity
from distributor.api.utils.line_items import parse_items_json, build_items, order_total, item_response
from distributor.api.utils.dates import parse_optional_datetime

__all__ = [
    # db_helpers
    "get_by_id",
    "validate_unique",
    "validate_reference",
    "ensure_id_matches",
    "delete_entity",
    # filters
    "apply_search_filter",
    "apply_iexact_filter",
    # sequencers
    "generate_document_number",
    "next_sales_order_number",
    "next_purchase_order_number",
    "Prefixes",
    # updates
    "update_entity",
    # line items
    "parse_items_json",
    "build_items",
    "order_total",
    "item_response",
    # dates
    "parse_optional_datetime",
]
