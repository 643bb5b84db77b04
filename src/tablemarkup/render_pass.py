from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from tablemarkup.column_options import ColumnOptionAccumulator, SortOrderMap
from tablemarkup.markup_writer import MarkupWriter
from tablemarkup.models import RenderContext, RenderSettings, TableModel


@dataclass
class RenderPass:
    """State of one render invocation, shared by the header, body and footer passes.

    `column_options` and `sort_order` are derived from the column declarations by the header
    pass of this render and are never carried over to another one.
    """
    table          : TableModel
    settings       : RenderSettings
    context        : RenderContext
    writer         : MarkupWriter
    column_options : ColumnOptionAccumulator | None = None
    sort_order     : SortOrderMap                   = field(default_factory=SortOrderMap)
    wrappers       : List[str]                      = field(default_factory=list)
    rows_rendered  : int                            = 0

    @property
    def client_id(self) -> str:
        return self.table.client_id

    @property
    def escaped_id(self) -> str:
        return self.table.escaped_id


def merge_attribute(primary: str | None, secondary: str | None, separator: str) -> str | None:
    """Combine a shared column attribute with a header/body/footer specific one.

    Either alone is used as-is; both are joined as `primary<separator>secondary`.
    """
    if primary is not None and secondary is not None:
        return f"{primary}{separator}{secondary}"
    return primary if primary is not None else secondary
