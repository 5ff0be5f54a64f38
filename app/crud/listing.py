from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Query


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def apply_filters(query: Query, model: Any, filters: Optional[Dict[str, Any]]) -> Query:
    """Exact-match filters; keys are column attribute names, None values are skipped."""
    for attr, value in (filters or {}).items():
        if value is not None:
            query = query.filter(getattr(model, attr) == value)
    return query


def apply_search(query: Query, columns: Sequence[Any], search: Optional[str]) -> Query:
    """Case-insensitive substring match over ``columns`` combined with OR."""
    if not search or not search.strip():
        return query
    pattern = f"%{_escape_like(search.strip())}%"
    return query.filter(or_(*[column.ilike(pattern, escape="\\") for column in columns]))


def paginate(query: Query, order_by: Sequence[Any], limit: int, offset: int) -> Tuple[List[Any], int]:
    """Return one page and the total row count for the same predicate.

    The ordering must end with a unique column so pages never overlap.
    """
    total = query.order_by(None).count()
    items = query.order_by(*order_by).offset(offset).limit(limit).all()
    return items, total
