"""Back/forward history of viewed centers."""

import logging
from typing import Optional

from ..models import GeoCoord

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 20
DEFAULT_HISTORY_RADIUS_M = 500.0


class CenterHistory:
    """Bounded list of visited centers with a cursor.

    The newest entry is at the end of the list. Saving a position while the
    cursor is not at the newest entry throws away everything after the
    cursor, like a browser's back/forward list.
    """

    def __init__(
        self,
        max_items: int = DEFAULT_HISTORY_SIZE,
        coalesce_radius_m: float = DEFAULT_HISTORY_RADIUS_M,
    ):
        if max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {max_items}")
        if coalesce_radius_m < 0:
            raise ValueError(f"coalesce_radius_m must not be negative, got {coalesce_radius_m}")
        self.max_items = max_items
        self.coalesce_radius_m = coalesce_radius_m
        self._items: list[GeoCoord] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._items)

    def size(self) -> int:
        return len(self._items)

    @property
    def cursor(self) -> int:
        return self._cursor

    def current(self) -> Optional[GeoCoord]:
        if not self._items:
            return None
        return self._items[self._cursor]

    def _at_newest(self) -> bool:
        return self._cursor == len(self._items) - 1

    def save_current(self, coord: GeoCoord) -> None:
        """Append ``coord`` as the newest entry and move the cursor to it."""
        if self._at_newest():
            if len(self._items) >= self.max_items:
                del self._items[: len(self._items) - self.max_items + 1]
        else:
            del self._items[self._cursor + 1:]

        self._items.append(coord)
        self._cursor = len(self._items) - 1
        logger.debug("Saved center %s (%d/%d)", coord, len(self._items), self.max_items)

    def back_available(self) -> bool:
        return len(self._items) > 1 and self._cursor != 0

    def forward_available(self) -> bool:
        return len(self._items) > 1 and self._cursor != len(self._items) - 1

    def go_back(self, live_center: Optional[GeoCoord] = None) -> bool:
        """Step the cursor back. Returns False if already at the oldest entry.

        When ``live_center`` has moved more than ``coalesce_radius_m`` away
        from the newest entry, it is saved first so that going forward
        again returns to it.
        """
        if live_center is not None:
            current = self.current()
            if current is None or (
                self._at_newest() and current.distance_to(live_center) > self.coalesce_radius_m
            ):
                self.save_current(live_center)

        if not self.back_available():
            return False
        self._cursor -= 1
        return True

    def go_forward(self) -> bool:
        if not self.forward_available():
            return False
        self._cursor += 1
        return True

    def resize_limit(self, max_items: int) -> None:
        """Change the size cap, dropping the oldest entries if needed."""
        if max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {max_items}")
        self.max_items = max_items
        excess = len(self._items) - max_items
        if excess > 0:
            del self._items[:excess]
            self._cursor = max(0, self._cursor - excess)

    def clear(self) -> None:
        self._items = []
        self._cursor = -1

    def items(self) -> list[GeoCoord]:
        return list(self._items)

    def entries(self) -> list[str]:
        """One label per entry, oldest first, marking the neighbours of the cursor."""
        result = []
        for i, coord in enumerate(self._items):
            if i == self._cursor - 1:
                extra = "[Back]"
            elif i == self._cursor + 1:
                extra = "[Forward]"
            elif i == self._cursor:
                extra = "[Current]"
            else:
                extra = ""
            result.append(f"{coord}{extra}")
        return result
