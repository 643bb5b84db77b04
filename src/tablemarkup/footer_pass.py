from tablemarkup.render_pass import RenderPass
from tablemarkup.search_row import SearchRowRenderer


class FooterRenderer:
    """Writes <tfoot> when a column has footer markup or the search row sits at the bottom."""

    def __init__(self, render_pass: RenderPass) -> None:
        self.render_pass = render_pass

    def encode(self) -> bool:
        """Write the footer if needed; returns whether a <tfoot> was written."""
        rp = self.render_pass
        w = rp.writer
        rendered = [column for _, column in rp.table.rendered_columns]
        has_searchbar = rp.settings.search_row_on_bottom
        has_footer = any(column.footer_markup is not None for column in rendered)
        if not (has_footer or has_searchbar):
            return False

        w.start_element("tfoot")
        if has_searchbar:
            SearchRowRenderer(rp).encode()
        if has_footer:
            w.start_element("tr")
            for column in rendered:
                w.start_element("th")
                w.write_attribute("style", column.footer_style)
                w.write_attribute("class", column.footer_style_class)
                w.write_markup(column.footer_markup)
                w.end_element("th")
            w.end_element("tr")
        w.end_element("tfoot")
        return True
