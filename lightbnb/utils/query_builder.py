"""
Property search query construction.

Builds a single parameterized SELECT from sparse PropertySearchFilters.
Row-level predicates and aggregate predicates are collected separately so
that the former end up in WHERE and the latter in HAVING. Filter values are
only ever passed to SQLAlchemy as bound parameters.
"""

from sqlalchemy import Select, and_, func, select
from sqlalchemy.engine import Dialect
from sqlalchemy.sql import ColumnElement
from dataclasses import dataclass, field
from typing import Any, List, Optional
import logging

from lightbnb.config import DEFAULT_RESULT_LIMIT
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.schemas.property import PropertySearchFilters

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = DEFAULT_RESULT_LIMIT


@dataclass(frozen=True)
class CompiledQuery:
    """SQL text for a specific dialect plus its bound values in placeholder order."""
    sql: str
    params: List[Any] = field(default_factory=list)


def average_rating() -> ColumnElement:
    """Average review rating of a property; NULL when it has no reviews."""
    return func.avg(PropertyReview.rating)


def validate_limit(limit: int) -> None:
    """Reject negative limits, which SQLite would treat as unlimited."""
    if limit < 0:
        raise ValueError("limit cannot be negative")


def _row_conditions(filters: PropertySearchFilters) -> List[ColumnElement]:
    """Predicates applied before grouping, in city, owner, price order."""
    conditions = []

    # City filter (case-insensitive partial match)
    if filters.city:
        conditions.append(Property.city.ilike(f"%{filters.city}%"))

    # Owner filter
    if filters.owner_id is not None:
        conditions.append(Property.owner_id == filters.owner_id)

    # Price range filter, stored in cents
    price_range = filters.price_range_in_cents()
    if price_range is not None:
        minimum_cents, maximum_cents = price_range
        conditions.append(Property.cost_per_night.between(minimum_cents, maximum_cents))
    elif filters.has_partial_price_range:
        logger.warning(
            "Ignoring price filter: both minimum_price_per_night and "
            "maximum_price_per_night are required"
        )

    return conditions


def _aggregate_conditions(filters: PropertySearchFilters) -> List[ColumnElement]:
    """Predicates applied to the grouped rows."""
    conditions = []

    if filters.minimum_rating is not None:
        conditions.append(average_rating() >= filters.minimum_rating)

    return conditions


def build_property_search(
    filters: Optional[PropertySearchFilters] = None,
    limit: int = DEFAULT_LIMIT
) -> Select:
    """
    Build the property search statement.

    Args:
        filters: Optional search criteria; None means no filtering
        limit: Maximum number of properties to return

    Returns:
        SELECT of (Property, average_rating) grouped per property, ordered by
        cost_per_night ascending and capped at ``limit``
    """
    validate_limit(limit)

    filters = filters or PropertySearchFilters()

    query = (
        select(Property, average_rating().label("average_rating"))
        .outerjoin(PropertyReview, PropertyReview.property_id == Property.id)
    )

    row_conditions = _row_conditions(filters)
    if row_conditions:
        query = query.where(and_(*row_conditions))

    query = query.group_by(Property.id)

    aggregate_conditions = _aggregate_conditions(filters)
    if aggregate_conditions:
        query = query.having(and_(*aggregate_conditions))

    return (
        query
        .order_by(Property.cost_per_night.asc(), Property.id.asc())
        .limit(limit)
    )


def compile_query(statement: Select, dialect: Dialect) -> CompiledQuery:
    """
    Render ``statement`` for ``dialect`` without inlining any values.

    For positional paramstyles the returned params follow placeholder order.
    """
    compiled = statement.compile(dialect=dialect)
    if compiled.positiontup is not None:
        params = [compiled.params[name] for name in compiled.positiontup]
    else:
        params = list(compiled.params.values())
    return CompiledQuery(sql=str(compiled), params=params)
