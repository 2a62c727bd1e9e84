"""
List-query pipeline: filter -> search -> sort -> paginate, always in that order.

Raw query strings are parsed into a TaskQuery first; any invalid value raises
TaskValidationError before a single record is touched.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Optional

from tasks_api.domain.errors import TaskValidationError
from tasks_api.domain.task_models import SortField, SortOrder, Task, TaskPage, TaskQuery

_INT_RE = re.compile(r"-?[0-9]+")

SORT_KEYS: Dict[SortField, Callable[[Task], Any]] = {
    SortField.id: lambda t: t.id,
    SortField.title: lambda t: t.title,
    SortField.done: lambda t: t.done,
    SortField.created_at: lambda t: t.created_at,
}


def _parse_int(raw: Optional[str]) -> Optional[int]:
    """
    Whole-string ASCII decimal integer or None. No prefix parsing:
    "2.5" and "5abc" are not integers here.
    """
    if raw is None:
        return None
    raw = raw.strip()
    if not _INT_RE.fullmatch(raw):
        return None
    return int(raw)


def parse_task_query(
    done: Optional[str] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    limit: Optional[str] = None,
    page: Optional[str] = None,
) -> TaskQuery:
    done_value: Optional[bool] = None
    if done is not None:
        if done not in ("true", "false"):
            raise TaskValidationError("done must be 'true' or 'false'")
        done_value = done == "true"

    sort_value: Optional[SortField] = None
    if sort:
        try:
            sort_value = SortField(sort)
        except ValueError:
            valid = ", ".join(f.value for f in SortField)
            raise TaskValidationError(f"Invalid sort field. Use one of: {valid}") from None

    order_value = SortOrder.asc
    if order is not None:
        try:
            order_value = SortOrder(order)
        except ValueError:
            raise TaskValidationError("order must be 'asc' or 'desc'") from None

    limit_value: Optional[int] = None
    page_value = 1
    if limit is not None:
        limit_value = _parse_int(limit)
        if limit_value is None or limit_value <= 0:
            raise TaskValidationError("limit must be a positive number")
        parsed_page = _parse_int(page)
        if parsed_page is not None:
            if parsed_page <= 0:
                raise TaskValidationError("page must be positive")
            page_value = parsed_page

    return TaskQuery(
        done=done_value,
        search=search or None,
        sort=sort_value,
        order=order_value,
        limit=limit_value,
        page=page_value,
    )


def run_task_query(tasks: List[Task], query: TaskQuery) -> TaskPage:
    result = list(tasks)

    if query.done is not None:
        result = [t for t in result if t.done == query.done]

    if query.search:
        needle = query.search.casefold()
        result = [t for t in result if needle in t.title.casefold()]

    if query.sort is not None:
        # sorted() is stable; desc is the exact mirror of asc, ties included
        result = sorted(result, key=SORT_KEYS[query.sort])
        if query.order is SortOrder.desc:
            result.reverse()

    total = len(result)
    if query.limit is not None:
        start = (query.page - 1) * query.limit
        result = result[start:start + query.limit]

    return TaskPage(total=total, count=len(result), page=query.page, data=result)
