import logging

from tablemarkup.column_options import ColumnOptionAccumulator, SortOrderMap
from tablemarkup.js_literal import is_digits
from tablemarkup.models import ColumnSpec
from tablemarkup.render_pass import RenderPass, merge_attribute
from tablemarkup.search_row import SearchRowRenderer


logger = logging.getLogger(__name__)


def label_from_expression(expression: str) -> str:
    """Header label guessed from a binding such as '#{car.brand}'.

    Takes the text after the last '.', upper-cases its first letter and drops the last
    character, which for a '#{...}' binding is the closing brace: '#{car.brand}' -> 'Brand'.
    A bare path loses its last letter instead ('car.brands' -> 'Brand').
    """
    pos = expression.rfind(".")
    if pos > 0:
        expression = expression[pos + 1:]
    expression = expression[:1].upper() + expression[1:]
    return expression[:-1]


class HeaderRenderer:
    """Writes <thead> and derives the per-column client options and the initial sort order."""

    def __init__(self, render_pass: RenderPass) -> None:
        self.render_pass = render_pass

    def encode(self) -> None:
        rp = self.render_pass
        w = rp.writer
        rendered = rp.table.rendered_columns

        rp.column_options = ColumnOptionAccumulator(len(rendered))
        rp.sort_order = SortOrderMap()

        w.start_element("thead")
        if rp.settings.search_row_on_top:
            SearchRowRenderer(rp).encode()

        if rp.table.header_markup is not None:
            w.write_markup(rp.table.header_markup)
            for index, (_, column) in enumerate(rendered):
                self._register_column_options(index, column)
            w.end_element("thead")
            return

        w.start_element("tr")
        for index, (declared_index, column) in enumerate(rendered):
            w.start_element("th")
            w.write_attribute("style", merge_attribute(column.style, column.header_style, ";"))
            w.write_attribute("class", merge_attribute(column.style_class, column.header_style_class, " "))
            self._write_label(column, declared_index)
            self._register_column_options(index, column)
            w.end_element("th")
        w.end_element("tr")
        w.end_element("thead")
        logger.debug("Header of %s: %s rendered columns, %s sort orders", rp.client_id, len(rendered), len(rp.sort_order))

    # ==============================
    # Labels
    # ==============================

    def _write_label(self, column: ColumnSpec, declared_index: int) -> None:
        w = self.render_pass.writer
        if column.header_markup is not None:
            w.write_markup(column.header_markup)
        elif column.label is not None:
            self._write_styled_text(column.label, column.label_style, column.label_style_class)
        elif (child := column.first_child_label()) is not None:
            self._write_styled_text(child.label, child.label_style, child.label_style_class)
        elif column.value_expression is not None:
            self._write_styled_text(
                label_from_expression(column.value_expression), column.label_style, column.label_style_class
            )
        else:
            w.write_text(f"Column #{declared_index}")

    def _write_styled_text(self, text: str | None, style: str | None, style_class: str | None) -> None:
        w = self.render_pass.writer
        wrapped = style is not None or style_class is not None
        if wrapped:
            w.start_element("span")
            w.write_attribute("style", style)
            w.write_attribute("class", style_class)
        w.write_text(text)
        if wrapped:
            w.end_element("span")

    # ==============================
    # Column options
    # ==============================

    def _register_column_options(self, index: int, column: ColumnSpec) -> None:
        rp = self.render_pass
        assert rp.column_options is not None

        if column.order is not None:
            rp.sort_order.put(index, column.order)
        if column.order_by is not None:
            rp.column_options.append(index, f"'orderDataType': '{column.order_by}'")
        if column.data_type is not None:
            rp.column_options.append(index, f"'type': '{column.data_type}'")
        if column.orderable is False:
            rp.column_options.append(index, "'orderable': false")
        if column.searchable is False:
            rp.column_options.append(index, "'searchable': false")
        if column.width is not None:
            width = str(column.width)
            if is_digits(width):
                width += "px"
            rp.column_options.append(index, f"'width':'{width}'")
        if column.custom_options is not None:
            rp.column_options.append(index, column.custom_options)
