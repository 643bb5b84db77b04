from tablemarkup.render_pass import RenderPass


SEARCH_CELL_CLASS = "bf-multisearch"


class SearchRowRenderer:
    """The per-column search row, written into <thead> and/or <tfoot>.

    Each searchable column gets a `td.bf-multisearch` holding its header markup or label; the
    initialization script later swaps that text for an input field. Columns declared
    non-searchable produce no cell at all.
    """

    def __init__(self, render_pass: RenderPass) -> None:
        self.render_pass = render_pass

    def encode(self) -> int:
        """Write the row and return the number of search cells written."""
        w = self.render_pass.writer
        cells = 0
        w.start_element("tr")
        for _, column in self.render_pass.table.rendered_columns:
            if not column.is_searchable:
                continue
            w.start_element("td")
            w.write_attribute("style", column.footer_style)
            if column.footer_style_class is not None:
                w.write_attribute("class", f"{SEARCH_CELL_CLASS} {column.footer_style_class}")
            else:
                w.write_attribute("class", SEARCH_CELL_CLASS)
            if column.header_markup is not None:
                w.write_markup(column.header_markup)
            elif column.label is not None:
                w.write_text(column.label)
            w.end_element("td")
            cells += 1
        w.end_element("tr")
        return cells
