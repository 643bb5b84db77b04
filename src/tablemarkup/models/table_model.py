from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, List, Protocol, Sequence, Tuple, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .column_spec import ColumnSpec


NO_ROW = -1


@runtime_checkable
class RowSource(Protocol):
    """Random access to the rows of a table. Implementations may report gaps as unavailable rows."""

    @property
    def row_count(self) -> int: ...

    def is_row_available(self, index: int) -> bool: ...

    def row_value(self, index: int) -> Any: ...


class SequenceRowSource:
    """RowSource over an in-memory sequence; every index inside the sequence is available."""

    def __init__(self, rows: Sequence[Any]) -> None:
        self._rows = rows

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def is_row_available(self, index: int) -> bool:
        return 0 <= index < len(self._rows)

    def row_value(self, index: int) -> Any:
        return self._rows[index]


class RowCursor:
    """A seekable position over a RowSource, owned by a single render call."""

    def __init__(self, source: RowSource) -> None:
        self._source = source
        self._row_index = NO_ROW

    @property
    def row_count(self) -> int:
        return self._source.row_count

    @property
    def row_index(self) -> int:
        return self._row_index

    @row_index.setter
    def row_index(self, value: int) -> None:
        self._row_index = value

    def reset(self) -> None:
        self._row_index = NO_ROW

    def is_row_available(self) -> bool:
        if not 0 <= self._row_index < self._source.row_count:
            return False
        return self._source.is_row_available(self._row_index)

    def current_row_value(self) -> Any:
        if not self.is_row_available():
            raise IndexError(f"No row available at index {self._row_index}.")
        return self._source.row_value(self._row_index)


class TableModel(BaseModel):
    """The table being rendered: its identity, its column declarations and its rows."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    client_id     : str               = Field(...,                 description="Component identifier; may contain ':' naming separators")
    columns       : List[ColumnSpec]  = Field(default_factory=list, description="Columns in declaration order")
    rows          : Any               = Field(default_factory=list, validate_default=True, description="A RowSource or any sequence of rows")
    header_markup : str | None        = Field(default=None,        description="Markup replacing the generated header row")
    caption       : str | None        = Field(default=None,        description="Table caption")

    @field_validator("rows", mode="before")
    @classmethod
    def wrap_sequence_rows(cls, v: Any) -> RowSource:
        if v is None:
            return SequenceRowSource([])
        if isinstance(v, RowSource):
            return v
        if isinstance(v, Sequence) and not isinstance(v, (str, bytes)):
            return SequenceRowSource(v)
        raise ValueError(f"rows must be a RowSource or a sequence, got {type(v).__name__}.")

    @property
    def row_source(self) -> RowSource:
        return self.rows

    @property
    def row_count(self) -> int:
        return self.row_source.row_count

    @property
    def rendered_columns(self) -> List[Tuple[int, ColumnSpec]]:
        """(declared index, column) for every column that is rendered, in declaration order."""
        return [(index, column) for index, column in enumerate(self.columns) if column.rendered]

    @property
    def escaped_id(self) -> str:
        """The client id with naming-container separators removed, as used in CSS class names."""
        return self.client_id.replace(":", "")

    @contextmanager
    def cursor(self) -> Generator[RowCursor, None, None]:
        """A fresh cursor positioned on no row; it is reset again however the block exits."""
        cursor = RowCursor(self.row_source)
        try:
            yield cursor
        finally:
            cursor.reset()
