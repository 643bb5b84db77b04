from __future__ import annotations

import logging

from collections import OrderedDict
from typing import Iterator, List, Literal, Tuple, cast

from tablemarkup.errors import TableConfigurationError
from tablemarkup.js_literal import JsRaw


logger = logging.getLogger(__name__)

SortDirection = Literal["asc", "desc"]
SORT_DIRECTIONS: Tuple[str, ...] = ("asc", "desc")


class ColumnOptionAccumulator:
    """Per-column DataTables option fragments, indexed by rendered-column position.

    The index space is dense: hidden columns get no slot. Storage is only allocated on the first
    `append()`, so a table without any column directive emits no `columns` option at all.
    """

    def __init__(self, rendered_column_count: int) -> None:
        self.rendered_column_count = rendered_column_count
        self._fragments: List[str | None] | None = None

    def append(self, index: int, fragment: str) -> None:
        """Add `fragment` to column `index`, comma-joining it to whatever is already there."""
        if self._fragments is None:
            self._fragments = [None] * self.rendered_column_count
        if not 0 <= index < len(self._fragments):
            raise IndexError(f"Column index {index} is outside the {len(self._fragments)} rendered columns.")
        current = self._fragments[index]
        self._fragments[index] = fragment if current is None else f"{current},{fragment}"

    def get(self, index: int) -> str | None:
        if self._fragments is None:
            return None
        return self._fragments[index]

    @property
    def is_empty(self) -> bool:
        return self._fragments is None

    def __len__(self) -> int:
        return 0 if self._fragments is None else len(self._fragments)

    def to_js_value(self) -> List[JsRaw | None] | None:
        """The `columns` array: one object per rendered column, null where nothing was declared.

        Raises:
            TableConfigurationError: a column sorts by the `dom-text` plugin without declaring its data type.
        """
        if self._fragments is None:
            return None
        result: List[JsRaw | None] = []
        for index, fragment in enumerate(self._fragments):
            if fragment is None:
                result.append(None)
                continue
            if "dom-text" in fragment and "type" not in fragment:
                logger.error("Column %s orders by dom-text without a data type: %s", index, fragment)
                raise TableConfigurationError(
                    "You have to specify the data type of the column if you want to sort it using order-by."
                )
            result.append(JsRaw("{" + fragment + "}"))
        return result


class SortOrderMap:
    """Initial sort order, column index to direction, in the order the columns declared it."""

    def __init__(self) -> None:
        self._orders: OrderedDict[int, SortDirection] = OrderedDict()

    def put(self, index: int, direction: str) -> None:
        direction = direction.strip()
        if direction not in SORT_DIRECTIONS:
            logger.error("Invalid order %r on column %s", direction, index)
            raise TableConfigurationError("Invalid column order. Legal values are 'asc' and 'desc'.")
        self._orders[index] = cast(SortDirection, direction)

    def items(self) -> Iterator[Tuple[int, SortDirection]]:
        return iter(self._orders.items())

    def __len__(self) -> int:
        return len(self._orders)

    def __contains__(self, index: object) -> bool:
        return index in self._orders

    def to_js_value(self) -> List[List[int | str]]:
        return [[index, direction] for index, direction in self._orders.items()]
