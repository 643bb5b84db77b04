import logging

from typing import Any

from tablemarkup.models import ColumnSpec, resolve_for_row
from tablemarkup.render_pass import RenderPass, merge_attribute


logger = logging.getLogger(__name__)

SELECTED_ROW_CLASS = "bf-selected-row"


def row_style_class(configured: str | None, visible_row_index: int, selected: bool) -> str | None:
    """The class attribute of a body row.

    Comma separated alternatives in `configured` are striped over the rows actually written;
    a selected row additionally gets the `bf-selected-row` class.
    """
    style_class = configured
    if style_class is not None and "," in style_class:
        alternatives = style_class.split(",")
        style_class = alternatives[visible_row_index % len(alternatives)]
    if selected:
        style_class = SELECTED_ROW_CLASS if style_class is None else f"{style_class.strip()} {SELECTED_ROW_CLASS}"
    if style_class is None:
        return None
    return style_class.strip() or None


class BodyRenderer:
    """Writes <tbody>: one <tr> per available row, one <td> per rendered column."""

    def __init__(self, render_pass: RenderPass) -> None:
        self.render_pass = render_pass

    def encode(self) -> int:
        """Write the body and return the number of rows written."""
        rp = self.render_pass
        w = rp.writer
        columns = [column for _, column in rp.table.rendered_columns]
        selected_row = rp.settings.selected_row
        visible_row_index = 0

        w.start_element("tbody")
        with rp.table.cursor() as cursor:
            for row_index in range(cursor.row_count):
                cursor.row_index = row_index
                if not cursor.is_row_available():
                    continue
                row = cursor.current_row_value()
                w.start_element("tr")
                w.write_attribute(
                    "class",
                    row_style_class(rp.settings.row_style_class, visible_row_index, self._is_selected(row, selected_row)),
                )
                for column in columns:
                    self._encode_cell(column, row)
                w.end_element("tr")
                visible_row_index += 1
        w.end_element("tbody")

        rp.rows_rendered = visible_row_index
        logger.debug("Body of %s: %s rows rendered", rp.client_id, visible_row_index)
        return visible_row_index

    @staticmethod
    def _is_selected(row: Any, selected_row: Any) -> bool:
        if selected_row is None:
            return False
        return row is selected_row or selected_row == row

    def _encode_cell(self, column: ColumnSpec, row: Any) -> None:
        w = self.render_pass.writer
        w.start_element("td")
        w.write_attribute("style", merge_attribute(column.style, column.content_style, ";"))
        w.write_attribute("class", merge_attribute(column.style_class, column.content_style_class, " "))
        w.write_attribute("data-order", resolve_for_row(column.data_order, row))
        w.write_attribute("data-search", resolve_for_row(column.data_search, row))
        w.write_text(column.value_for(row))
        for child in column.children:
            w.write_markup(child.render(row))
        w.end_element("td")
