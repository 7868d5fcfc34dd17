"""Ledger page entity."""

import math
from dataclasses import dataclass, field

from dashcache.core.entities.records import CashbackTransaction


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed for ``total`` items, at least one."""
    if page_size < 1:
        raise ValueError("page_size must be positive")
    return max(1, math.ceil(total / page_size))


def clamp_page(page_number: int, total: int, page_size: int) -> int:
    """Clamp a page number into ``[1, page_count(total, page_size)]``."""
    return min(max(page_number, 1), page_count(total, page_size))


@dataclass(frozen=True)
class LedgerPage:
    """One page of cashback transaction history."""

    items: tuple[CashbackTransaction, ...] = field(default_factory=tuple)
    total: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def page_count(self) -> int:
        """Total number of pages."""
        return page_count(self.total, self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    def clamp(self, page_number: int) -> int:
        """Clamp a requested page number against this page's total."""
        return clamp_page(page_number, self.total, self.page_size)
