from typing import Any, List

from tablemarkup.js_literal import JsRaw, is_integer_literal, quote


SELECTED_ROW_SELECTOR = "'.bf-selected-row'"
SELECTED_COLUMN_SELECTOR = "'.bf-selected-column'"


def selection_target(value: Any, placeholder: str) -> str:
    """The argument passed to `rows(...)` / `columns(...)`.

    Integral strings and numbers are indexes, other strings are selectors; any other object
    (typically the selected row bean itself) means "whatever was rendered as selected".
    """
    if isinstance(value, str):
        return value if is_integer_literal(value) else quote(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return placeholder


def selection_statements(widget_var: str, selected_row: Any, selected_column: Any) -> List[str]:
    statements: List[str] = []
    if selected_row is not None:
        target = selection_target(selected_row, SELECTED_ROW_SELECTOR)
        statements.append(f"{widget_var}.DataTable().rows({target}).select();")
    if selected_column is not None:
        target = selection_target(selected_column, SELECTED_COLUMN_SELECTOR)
        statements.append(f"{widget_var}.DataTable().columns({target}).select();")
    return statements


def init_complete_callback(widget_var: str, selected_row: Any, selected_column: Any) -> JsRaw | None:
    """`initComplete` handler selecting the configured row and column, or None when nothing is preselected."""
    statements = selection_statements(widget_var, selected_row, selected_column)
    if not statements:
        return None
    return JsRaw("function( settings, json ) { " + " ".join(statements) + " }")
