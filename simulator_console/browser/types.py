"""
Value types shared by the resource browser.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Tuple


class MasterStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class MasterItem:
    """Top-level entity shown in the left-hand list and used as a dependent filter."""

    id: int
    display_key: Optional[str]
    enabled: bool = True
    metadata: Any = None


@dataclass(frozen=True)
class OwnerScope:
    """
    Owner constraint of a dependent query.

    ``owner_id is None`` means every owner. Build with ``all()`` or ``of()``
    so that a real owner id of 0 is never confused with "all".
    """

    owner_id: Optional[int] = None

    @classmethod
    def all(cls) -> "OwnerScope":
        return cls(None)

    @classmethod
    def of(cls, owner_id: int) -> "OwnerScope":
        return cls(owner_id)

    @classmethod
    def from_selection(cls, selection: Optional[int]) -> "OwnerScope":
        return cls.all() if selection is None else cls.of(selection)

    @property
    def is_all(self) -> bool:
        return self.owner_id is None


def total_pages(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


@dataclass(frozen=True)
class PageWindow:
    page_num: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    @property
    def row_range(self) -> Tuple[int, int]:
        """1-based (first, last) rows shown on this page; (0, 0) when empty."""
        if self.total <= 0:
            return 0, 0
        first = (self.page_num - 1) * self.page_size + 1
        return first, min(self.page_num * self.page_size, self.total)

    @property
    def has_previous(self) -> bool:
        return self.page_num > 1

    @property
    def has_next(self) -> bool:
        return self.page_num < self.total_pages


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of one dependent page request.

    ``applied`` results belong to the latest generation and must be shown;
    ``stale`` results were superseded and must be ignored.
    """

    applied: bool
    stale: bool = False
    items: Sequence[Any] = ()
    total: int = 0
    error: Optional[str] = None

    @classmethod
    def superseded(cls) -> "FetchResult":
        return cls(applied=False, stale=True)


@dataclass(frozen=True)
class MasterListState:
    status: MasterStatus
    items: Sequence[MasterItem] = ()
    error_message: Optional[str] = None


@dataclass
class DependentState:
    items: Sequence[Any] = ()
    total: int = 0
    loading: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class BrowserView:
    """Snapshot of everything a screen needs to render."""

    resource_label: str
    query: str
    masters: Sequence[MasterItem]
    master_status: MasterStatus
    master_error: Optional[str]
    selection: Optional[int]
    selection_enabled: bool
    owner_label: Optional[str]
    window: PageWindow
    items: Sequence[Any] = field(default_factory=tuple)
    loading: bool = False
    error: Optional[str] = None
    # Either panel has a request in flight
    busy: bool = False
