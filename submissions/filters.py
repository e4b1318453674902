"""
Submission Query Building

Translates validated list-query parameters into a filter expression,
sort order and skip/limit window, and computes pagination
metadata for a page of results.

Filter expressions are small immutable nodes compiled to Django Q
objects by ``to_q``:

- Contains(field, value): case-insensitive substring match
- GreaterOrEqual(field, value) / LessOrEqual(field, value): range bounds
- Or(clauses) / And(clauses): boolean combinations
"""
import math
from dataclasses import dataclass
from datetime import datetime, time
from typing import Any, Optional, Tuple

from django.db.models import Q
from django.utils import timezone

PAGE_SIZE = 10

DEFAULT_SORT_BY = 'createdAt'
DEFAULT_SORT_ORDER = 'desc'

# API sort keys mapped to model fields
SORT_FIELDS = {
    'createdAt': 'created_at',
    'name': 'name',
    'email': 'email',
}

SORT_ORDERS = ('asc', 'desc')

SEARCH_FIELDS = ('name', 'email', 'message')

END_OF_DAY = time(23, 59, 59, 999000)


# ==============================================================================
# FILTER EXPRESSIONS
# ==============================================================================

@dataclass(frozen=True)
class Contains:
    field: str
    value: str


@dataclass(frozen=True)
class GreaterOrEqual:
    field: str
    value: Any


@dataclass(frozen=True)
class LessOrEqual:
    field: str
    value: Any


@dataclass(frozen=True)
class Or:
    clauses: Tuple[Any, ...]


@dataclass(frozen=True)
class And:
    clauses: Tuple[Any, ...]


def to_q(expression) -> Q:
    """Compile a filter expression into a Django Q object."""
    if expression is None:
        return Q()

    if isinstance(expression, Contains):
        return Q(**{f'{expression.field}__icontains': expression.value})

    if isinstance(expression, GreaterOrEqual):
        return Q(**{f'{expression.field}__gte': expression.value})

    if isinstance(expression, LessOrEqual):
        return Q(**{f'{expression.field}__lte': expression.value})

    if isinstance(expression, (Or, And)):
        combined = Q()
        for clause in expression.clauses:
            if isinstance(expression, Or):
                combined |= to_q(clause)
            else:
                combined &= to_q(clause)
        return combined

    raise TypeError(f"Unsupported filter expression: {expression!r}")


# ==============================================================================
# QUERY BUILDING
# ==============================================================================

@dataclass(frozen=True)
class SubmissionQuery:
    """Everything the repository needs to run one list query."""

    filter: Optional[Any]
    sort_field: str
    sort_direction: str
    skip: int
    limit: int


def _as_local_date(value):
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def start_of_day(value) -> datetime:
    """Midnight at the start of the given date in the current timezone."""
    day = _as_local_date(value)
    return timezone.make_aware(datetime.combine(day, time.min))


def end_of_day(value) -> datetime:
    """23:59:59.999 on the given date in the current timezone."""
    day = _as_local_date(value)
    return timezone.make_aware(datetime.combine(day, END_OF_DAY))


def build_filter(search=None, start_date=None, end_date=None):
    """
    Build the filter expression for a list query.

    Returns None when no criteria are given so that an unfiltered read
    returns every record.
    """
    clauses = []

    if search:
        clauses.append(Or(tuple(Contains(field, search) for field in SEARCH_FIELDS)))

    if start_date is not None:
        clauses.append(GreaterOrEqual('created_at', start_of_day(start_date)))

    if end_date is not None:
        clauses.append(LessOrEqual('created_at', end_of_day(end_date)))

    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return And(tuple(clauses))


def build_submission_query(params) -> SubmissionQuery:
    """
    Convert validated query parameters into a SubmissionQuery.

    Args:
        params: dict with optional keys page, search, sortBy, sortOrder,
            startDate and endDate (dates already parsed)
    """
    page = params.get('page') or 1
    sort_by = params.get('sortBy') or DEFAULT_SORT_BY
    sort_order = params.get('sortOrder') or DEFAULT_SORT_ORDER

    return SubmissionQuery(
        filter=build_filter(
            search=params.get('search'),
            start_date=params.get('startDate'),
            end_date=params.get('endDate'),
        ),
        sort_field=SORT_FIELDS[sort_by],
        sort_direction=sort_order,
        skip=(page - 1) * PAGE_SIZE,
        limit=PAGE_SIZE,
    )


# ==============================================================================
# PAGINATION
# ==============================================================================

def paginate(total_items, page, page_size=PAGE_SIZE):
    """
    Compute pagination metadata.

    Pages past the end are not clamped; the metadata still reports the
    real totals.
    """
    total_pages = math.ceil(total_items / page_size) if total_items else 0

    return {
        'page': page,
        'pageSize': page_size,
        'totalItems': total_items,
        'totalPages': total_pages,
        'hasNext': page < total_pages,
        'hasPrev': page > 1,
    }
