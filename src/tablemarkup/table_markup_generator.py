from __future__ import annotations

import logging, re

from typing import Any, Dict, List, Mapping, Protocol

from tablemarkup.body_pass import BodyRenderer
from tablemarkup.client_options import ClientOptions
from tablemarkup.footer_pass import FooterRenderer
from tablemarkup.header_pass import HeaderRenderer
from tablemarkup.js_literal import JsRaw, is_digits, is_integer_literal, quote, to_js
from tablemarkup.locale_resolver import LocaleResolver
from tablemarkup.markup_writer import MarkupWriter
from tablemarkup.models import RenderContext, RenderSettings, TableModel
from tablemarkup.render_pass import RenderPass
from tablemarkup.responsive import responsive_style_class
from tablemarkup.selection_script import init_complete_callback


logger = logging.getLogger(__name__)

# Toolbar layout used whenever export buttons are shown: length menu and filter side by side,
# then table, info, buttons and pager.
BUTTONS_DOM = "'<\"col-sm-6\"l><\"col-sm-6\"f>rtiBp'"

MULTI_SEARCH_FILTER = (
    '<div class="form-group has-feedback">'
    '<input class="form-control input-sm datatable-filter-field" type="text" placeholder="\' + title + \'" />'
    '<i class="fa fa-search form-control-feedback"></i>'
    '</div>'
)


class BehaviorDecoder(Protocol):
    """Applies the client's AJAX behaviour parameters for one component."""

    def decode(self, client_id: str, params: Mapping[str, Any]) -> None: ...


def normalize_page_length_menu(menu: str | None) -> str | None:
    """Wrap the page length menu in brackets unless it already is; idempotent."""
    if menu is None:
        return None
    menu = menu.strip()
    if not menu.startswith("["):
        menu = "[" + menu
    if not menu.endswith("]"):
        menu = menu + "]"
    return menu


def widget_var_name(client_id: str) -> str:
    """Global JavaScript variable holding the table's jQuery handle, derived from its client id."""
    name = re.sub(r"\W", "_", client_id)
    if name[:1].isdigit():
        name = "_" + name
    return name + "Widget"


class TableMarkupGenerator:
    """Renders a table skeleton plus the DataTables initialization script.

    The work is split like a component renderer's lifecycle:

        decode()          applies incoming AJAX behaviour parameters
        encode_begin()    wrappers, <table>, caption, <thead>, <tbody>, <tfoot>
        encode_children() nothing; the cells are written by encode_begin()
        encode_end()      closes the table and wrappers and writes the <script>

    `render()` runs the encode steps and returns the markup. The generator itself holds no
    state; everything a render derives lives in the RenderPass it returns from encode_begin().

    Usage:
        ```python
        table = TableModel(client_id="form:cars", columns=[ColumnSpec(label="Brand", accessor=lambda r: r.brand)], rows=cars)
        html = TableMarkupGenerator().render(table, RenderSettings(page_length=25))
        ```
    """

    # ==============================
    # Lifecycle
    # ==============================

    def decode(self, table: TableModel, settings: RenderSettings, params: Mapping[str, Any], decoder: BehaviorDecoder) -> bool:
        """Hand the request to the behaviour decoder unless the table is disabled."""
        if settings.disabled:
            return False
        decoder.decode(table.client_id, params)
        return True

    def encode_begin(
        self,
        table: TableModel,
        settings: RenderSettings,
        context: RenderContext | None = None,
        writer: MarkupWriter | None = None,
    ) -> RenderPass:
        rp = RenderPass(
            table=table,
            settings=settings,
            context=context or RenderContext(),
            writer=writer or MarkupWriter(),
        )
        w = rp.writer
        id_has_been_rendered = False

        if settings.scroll_horizontally:
            w.start_element("div")
            w.write_attribute("class", "table-responsive")
            w.write_attribute("id", table.client_id)
            rp.wrappers.append("div")
            id_has_been_rendered = True

        if responsive_style := responsive_style_class(settings.layout).strip():
            w.start_element("div")
            w.write_attribute("class", responsive_style)
            if not id_has_been_rendered:
                w.write_attribute("id", table.client_id)
                id_has_been_rendered = True
            rp.wrappers.append("div")

        if settings.content_disabled:
            w.start_element("fieldset")
            w.write_attribute("disabled", "disabled")
            if not id_has_been_rendered:
                w.write_attribute("id", table.client_id)
                id_has_been_rendered = True
            rp.wrappers.append("fieldset")

        w.start_element("table")
        # table selection needs an id on the <table> itself even when a wrapper took the client id
        w.write_attribute("id", f"{table.client_id}Inner" if id_has_been_rendered else table.client_id)
        w.write_attribute("class", self.table_style_class(table, settings))
        w.write_attribute("cellspacing", "0")
        w.write_attribute("style", settings.style)

        if table.caption is not None:
            w.start_element("caption")
            w.write_text(table.caption)
            w.end_element("caption")

        HeaderRenderer(rp).encode()
        BodyRenderer(rp).encode()
        FooterRenderer(rp).encode()
        return rp

    def encode_children(self, render_pass: RenderPass) -> None:
        """Cells are already written by encode_begin()."""

    def encode_end(self, render_pass: RenderPass) -> None:
        w = render_pass.writer
        options = self.build_options(render_pass)

        w.end_element("table")
        for wrapper in reversed(render_pass.wrappers):
            w.end_element(wrapper)

        w.start_element("script")
        w.write_text(self.build_script(render_pass, options))
        w.end_element("script")

    def render(self, table: TableModel, settings: RenderSettings | None = None, context: RenderContext | None = None) -> str:
        render_pass = self.encode_begin(table, settings or RenderSettings(), context)
        self.encode_children(render_pass)
        self.encode_end(render_pass)
        logger.debug("Rendered %s with %s rows", table.client_id, render_pass.rows_rendered)
        return render_pass.writer.getvalue()

    # ==============================
    # Markup helpers
    # ==============================

    @staticmethod
    def table_style_class(table: TableModel, settings: RenderSettings) -> str:
        style_class = "table "
        if settings.border:
            style_class += "table-bordered "
        if settings.striped:
            style_class += "table-striped "
        if settings.row_highlight:
            style_class += "table-hover "
        if settings.style_class is not None:
            style_class += settings.style_class
        return f"{style_class.rstrip()} {table.escaped_id}Table"

    @staticmethod
    def widget_var(render_pass: RenderPass) -> str:
        return render_pass.settings.widget_var or widget_var_name(render_pass.client_id)

    # ==============================
    # Client options
    # ==============================

    def build_options(self, render_pass: RenderPass) -> ClientOptions:
        """Assemble the DataTables options in their fixed emission order.

        Raises:
            TableConfigurationError: a column declaration cannot be expressed as a column option.
        """
        s = render_pass.settings
        options = ClientOptions()
        options.add("fixedHeader", s.fixed_header)
        options.add("responsive", s.responsive)
        options.add("paging", s.paginated)
        if not s.info:
            options.add("info", False)
        options.add("pageLength", s.page_length)
        if (menu := normalize_page_length_menu(s.page_length_menu)) is not None:
            options.add("lengthMenu", JsRaw(menu))
        options.add("searching", s.searching)
        options.add("order", render_pass.sort_order.to_js_value())
        options.add("stateSave", s.save_state)
        options.add("mark", True)
        options.add("select", self._select_block(s))
        self._add_scroll_options(options, s)

        language_url = LocaleResolver(render_pass.context).resolve(s)
        options.add("language", {"url": language_url} if language_url else None)

        if render_pass.column_options is not None:
            options.add("columns", render_pass.column_options.to_js_value())
        options.add_raw(s.custom_options)
        if s.export_buttons:
            options.add("dom", JsRaw(BUTTONS_DOM))
            options.add("buttons", list(s.export_buttons))

        options.add("initComplete", init_complete_callback(self.widget_var(render_pass), s.selected_row, s.selected_column))

        if s.row_group is not None:
            if is_integer_literal(s.row_group):
                options.add("orderFixed", [int(s.row_group), "asc"])
                options.add("rowGroup", {"dataSrc": int(s.row_group)})
            else:
                options.add("rowGroup", JsRaw(s.row_group))
        return options

    @staticmethod
    def _select_block(s: RenderSettings) -> Dict[str, Any] | None:
        if not s.select:
            return None
        block: Dict[str, Any] = {}
        if s.selected_items in ("column", "columns"):
            block["items"] = "column"
        elif s.selected_items in ("cell", "cells"):
            block["items"] = "cell"
        block["style"] = "single" if s.selection_mode.lower() == "single" else "os"
        if not s.selection_info:
            block["info"] = False
        if s.deselect_on_backdrop_click:
            block["blurable"] = True
        return block

    @staticmethod
    def _add_scroll_options(options: ClientOptions, s: RenderSettings) -> None:
        if s.scroll_size is None and not s.scroll_x:
            return
        if s.scroll_size is not None:
            # a bare number is a height in px; anything else carries its own unit and is quoted
            options.add("scrollY", JsRaw(s.scroll_size) if s.scroll_size and is_digits(s.scroll_size) else s.scroll_size)
        if s.scroll_x:
            options.add("scrollX", True)
        options.add("scrollCollapse", s.scroll_collapse)

    # ==============================
    # Script
    # ==============================

    def build_script(self, render_pass: RenderPass, options: ClientOptions) -> str:
        widget_var = self.widget_var(render_pass)
        escaped_id = render_pass.escaped_id
        selector_id = render_pass.client_id.replace(":", "\\\\:")
        parts: List[str] = [
            "$(document).ready(function() {",
            f"{widget_var} = $('.{escaped_id}Table');",
            # DataTables wraps the table; put the bare table back so AJAX updates can replace it by id
            f"var wrapper = $('#{selector_id}_wrapper');",
            f"wrapper.replaceWith({widget_var});",
            f"var table = {widget_var}.DataTable({{{options.serialize()}}});",
        ]
        if render_pass.settings.multi_column_search:
            parts.extend(self._multi_column_search_script(render_pass, widget_var))
        parts.append("} );")
        return "".join(parts)

    def _multi_column_search_script(self, render_pass: RenderPass, widget_var: str) -> List[str]:
        # non-searchable columns have no search cell, so input i belongs to searchable column cols[i]
        searchable = [
            (column_index, column)
            for column_index, (_, column) in enumerate(render_pass.table.rendered_columns)
            if column.is_searchable
        ]
        parts = [
            f"{widget_var}.find('.bf-multisearch').each(function(){{var title=$(this).text();$(this).html('{MULTI_SEARCH_FILTER}');}});",
            f"var inputs=$({widget_var}.find('.bf-multisearch input'));",
            f"var cols={to_js([column_index for column_index, _ in searchable])};",
            "inputs.each( function(i) {if(i>=cols.length){return;}"
            "var column=table.column(cols[i]);"
            "this.value=column.search();"
            "$(this).on('keyup change', function(){if(column.search()!==this.value){"
            "column.search(this.value).draw('page');}});",
            "});",
        ]
        for input_index, (column_index, column) in enumerate(searchable):
            if column.search_value:
                value = quote(column.search_value)
                parts.append(f"inputs[{input_index}].value={value};")
                parts.append(f"table.column({column_index}).search({value}).draw('page');")
        return parts
