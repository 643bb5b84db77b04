# models/__init__.py

# isort: off
from .column_spec import ColumnChild, ColumnSpec, resolve_for_row
from .table_model import NO_ROW, RowCursor, RowSource, SequenceRowSource, TableModel
from .render_settings import EXPORT_BUTTON_ORDER, RenderSettings, ResponsiveLayout
from .render_context import RenderContext
# isort: on


__all__ = [
    "ColumnChild",
    "ColumnSpec",
    "resolve_for_row",
    "NO_ROW",
    "RowCursor",
    "RowSource",
    "SequenceRowSource",
    "TableModel",
    "EXPORT_BUTTON_ORDER",
    "RenderSettings",
    "ResponsiveLayout",
    "RenderContext",
]
