"""SQL query assembly with positional parameters, filters and pagination."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterator

FILTERS_IDENTIFIER = "$filters$"
OFFSET_IDENTIFIER = "$offset$"
LIMIT_IDENTIFIER = "$limit$"

_RAW = "raw"


@dataclass(frozen=True)
class Filter:
    """A single condition of a where clause."""

    key: str
    value: Any
    where: str = "="

    @property
    def is_raw(self) -> bool:
        return self.where == _RAW


class Filters:
    """An ordered collection of filters; ``add`` calls can be chained."""

    def __init__(self, items: tuple[Filter, ...] | list[Filter] = ()) -> None:
        self._items: list[Filter] = list(items)

    def add(self, key: str, value: Any, where: str = "=") -> Filters:
        """Add a ``key <where> $n`` condition; list values compare with ANY."""
        self._items.append(Filter(key=key, value=value, where=where))
        return self

    def add_raw(self, cond: str) -> Filters:
        """Add a condition that is inserted verbatim and takes no parameter."""
        self._items.append(Filter(key="", value=cond, where=_RAW))
        return self

    def __iter__(self) -> Iterator[Filter]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Filters({self._items!r})"


@dataclass
class Builder:
    """Fills the ``$filters$``, ``$offset$`` and ``$limit$`` markers of a query."""

    filters: Filters = field(default_factory=Filters)
    limit: int = 0
    offset: int = 0
    use_pagination: bool = False

    def with_pagination(self, offset: int, limit: int) -> Builder:
        """Return a copy that paginates; the filters are shared with this builder."""
        return replace(self, use_pagination=True, offset=offset, limit=limit)

    def run(self, query: str) -> tuple[str, list[Any]]:
        """Return the query with its markers replaced, and its parameters."""
        where, params = self._build_where()

        offset_filter = limit_filter = ""
        if self.use_pagination:
            params.append(self.offset)
            offset_filter = f"offset ${len(params)}"
            params.append(self.limit)
            limit_filter = f"limit ${len(params)}"

        query = query.replace(FILTERS_IDENTIFIER, where, 1)
        query = query.replace(OFFSET_IDENTIFIER, offset_filter, 1)
        query = query.replace(LIMIT_IDENTIFIER, limit_filter, 1)
        return query, params

    def _build_where(self) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []
        for item in self.filters:
            if item.is_raw:
                clauses.append(str(item.value))
                continue
            params.append(item.value)
            if isinstance(item.value, (list, tuple)):
                clauses.append(f"{item.key} {item.where} ANY(${len(params)})")
            else:
                clauses.append(f"{item.key} {item.where} ${len(params)}")
        if not clauses:
            return "", params
        return "where " + " and ".join(clauses), params