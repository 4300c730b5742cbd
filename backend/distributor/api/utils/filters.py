"""
Filter Helpers - case-insensitive list filters
"""
from typing import Optional
from sqlalchemy.orm import Query
from sqlalchemy import func, or_


def apply_search_filter(
    query: Query,
    search_term: Optional[str],
    *fields
) -> Query:
    """
    Apply an ILIKE substring filter across several columns (OR).

    Args:
        query: SQLAlchemy query
        search_term: Text to look for
        *fields: Columns to search (e.g. Customer.name, Customer.code)

    Returns:
        Query with the filter applied

    Usage:
        query = apply_search_filter(query, search_term, Customer.name, Customer.code)
    """
    if not search_term or not fields:
        return query

    conditions = [field.ilike(f"%{search_term}%") for field in fields]
    return query.filter(or_(*conditions))


def apply_iexact_filter(query: Query, value: Optional[str], field) -> Query:
    """
    Apply a case-insensitive equality filter.

    Usage:
        query = apply_iexact_filter(query, group, Customer.group)
    """
    if not value:
        return query

    return query.filter(func.lower(field) == value.lower())
