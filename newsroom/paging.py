from __future__ import annotations
from typing import Any, Dict, List, Sequence

from newsroom.models import PagedResponse, Paging


def build_page(items: Sequence[Any], limit: int, offset: int, total: int) -> Dict[str, Any]:
    """
    Wrap one page of rows as {"data": [...], "paging": {limit, offset, total}}.
    `total` is the size of the whole matching set, not of this page.
    """
    data: List[Any] = list(items)[:limit]
    return PagedResponse(
        data=data, paging=Paging(limit=limit, offset=offset, total=total)
    ).model_dump()
