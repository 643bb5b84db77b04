from typing import Any, Dict, List, Mapping, Tuple

import pytest

from table_helpers import soup

from tablemarkup.errors import TableConfigurationError
from tablemarkup.models import ColumnSpec, RenderContext, RenderSettings, TableModel
from tablemarkup.models.render_settings import ResponsiveLayout
from tablemarkup.table_markup_generator import (
    BUTTONS_DOM,
    TableMarkupGenerator,
    normalize_page_length_menu,
    widget_var_name,
)


DEFAULT_OPTIONS = (
    "fixedHeader: false, responsive: false, paging: true, pageLength: 10, "
    "lengthMenu: [ 10, 25, 50, 100 ], searching: true, order: [], stateSave: false, mark: true"
)


class RecordingDecoder:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def decode(self, client_id: str, params: Mapping[str, Any]) -> None:
        self.calls.append((client_id, dict(params)))


class TestHelpers:
    @pytest.mark.parametrize("menu, expected", [
        ("[ 10, 25 ]", "[ 10, 25 ]"),
        ("10, 25, 50", "[10, 25, 50]"),
        ("[[10, 25], [10, 25]]", "[[10, 25], [10, 25]]"),
        (" 5, 10] ", "[5, 10]"),
        (None, None),
    ])
    def test_normalize_page_length_menu(self, menu, expected):
        assert normalize_page_length_menu(menu) == expected

    def test_normalize_page_length_menu_is_idempotent(self):
        once = normalize_page_length_menu("10, 20")
        assert normalize_page_length_menu(once) == once

    @pytest.mark.parametrize("client_id, expected", [
        ("form:cars", "form_carsWidget"),
        ("cars", "carsWidget"),
        ("j_idt12:0:cars-table", "j_idt12_0_cars_tableWidget"),
        ("1st", "_1stWidget"),
    ])
    def test_widget_var_name(self, client_id, expected):
        assert widget_var_name(client_id) == expected


class TestTableElement:
    def test_defaults(self, render, car_table):
        markup, _, _ = render(car_table)
        table = soup(markup).table
        assert table["id"] == "form:cars"
        assert table["class"] == "table table-striped table-hover formcarsTable".split()
        assert table["cellspacing"] == "0"
        assert table.caption is None

    def test_chrome_and_caption(self, render, car_columns):
        table = TableModel(client_id="cars", columns=car_columns, caption="Used cars")
        settings = RenderSettings(border=True, striped=False, row_highlight=False, style_class="compact", style="width:100%")
        markup, _, _ = render(table, settings)
        element = soup(markup).table
        assert element["class"] == ["table", "table-bordered", "compact", "carsTable"]
        assert element["style"] == "width:100%"
        assert element.caption.get_text() == "Used cars"

    def test_section_order(self, render, car_columns):
        table = TableModel(client_id="t", columns=[*car_columns[:1], ColumnSpec(label="X", footer_markup="f")])
        markup, _, _ = render(table)
        children = [child.name for child in soup(markup).table.children]
        assert children == ["thead", "tbody", "tfoot"]

    def test_scroll_horizontally_wrapper_takes_the_id(self, render, car_table):
        markup, rp, _ = render(car_table, RenderSettings(scroll_horizontally=True))
        wrapper = soup(markup).div
        assert wrapper["class"] == ["table-responsive"]
        assert wrapper["id"] == "form:cars"
        assert wrapper.table["id"] == "form:carsInner"
        assert rp.writer.open_elements == []

    def test_layout_and_fieldset_wrappers(self, render, car_table):
        settings = RenderSettings(layout=ResponsiveLayout(span=6, col_xs=12, offset=3), content_disabled=True)
        markup, _, _ = render(car_table, settings)
        parsed = soup(markup)
        grid = parsed.div
        assert grid["class"] == ["col-xs-12", "col-md-6", "col-md-offset-3"]
        assert grid["id"] == "form:cars"
        fieldset = grid.fieldset
        assert fieldset["disabled"] == "disabled"
        assert not fieldset.has_attr("id")
        assert fieldset.table["id"] == "form:carsInner"

    def test_fieldset_alone_takes_the_id(self, render, car_table):
        markup, _, _ = render(car_table, RenderSettings(content_disabled=True))
        fieldset = soup(markup).fieldset
        assert fieldset["id"] == "form:cars"
        assert fieldset.table["id"] == "form:carsInner"

    def test_script_follows_the_table(self, render, car_table):
        markup, _, _ = render(car_table, RenderSettings(scroll_horizontally=True))
        assert markup.index("</div>") < markup.index("<script>")
        assert markup.endswith("</script>")


class TestClientOptions:
    def test_defaults(self, render, car_table):
        _, _, options = render(car_table)
        assert options.serialize() == DEFAULT_OPTIONS

    def test_three_unlabelled_columns(self, render):
        table = TableModel(client_id="t", columns=[ColumnSpec(), ColumnSpec(), ColumnSpec()], rows=[{}, {}])
        markup, rp, options = render(table)
        parsed = soup(markup)
        assert len(parsed.thead.find_all("tr")) == 1
        assert [th.get_text() for th in parsed.thead.find_all("th")] == ["Column #0", "Column #1", "Column #2"]
        assert len(parsed.tbody.find_all("tr")) == 2
        serialized = options.serialize()
        assert "paging: true" in serialized
        for absent in ("select", "scrollY", "buttons", "columns", "language", "initComplete"):
            assert absent not in options

    def test_emission_order(self, render, car_columns, cars):
        columns = [car_columns[0], ColumnSpec(label="Price", data_type="num", order="desc")]
        table = TableModel(client_id="form:cars", columns=columns, rows=cars)
        settings = RenderSettings(
            fixed_header=True,
            responsive=True,
            info=False,
            page_length=25,
            page_length_menu="10, 25",
            save_state=True,
            select=True,
            scroll_size=200,
            scroll_x=True,
            lang="fr",
            custom_options="deferRender: true",
            export_buttons="csv, copy",
            selected_row="0",
            row_group=1,
        )
        _, _, options = render(table, settings)
        keys = [key for key, _ in options]
        assert keys == [
            "fixedHeader", "responsive", "paging", "info", "pageLength", "lengthMenu", "searching",
            "order", "stateSave", "mark", "select", "scrollY", "scrollX", "scrollCollapse", "language",
            "columns", None, "dom", "buttons", "initComplete", "orderFixed", "rowGroup",
        ]
        serialized = options.serialize()
        assert "info: false, pageLength: 25, lengthMenu: [10, 25]" in serialized
        assert "order: [[1, 'desc']]" in serialized
        assert "columns: [null, {'type': 'num'}], deferRender: true" in serialized
        assert f"dom: {BUTTONS_DOM}, buttons: ['copy', 'csv']" in serialized
        assert "orderFixed: [1, 'asc'], rowGroup: {dataSrc: 1}" in serialized

    def test_info_is_only_emitted_when_off(self, render, car_table):
        _, _, options = render(car_table, RenderSettings(info=True))
        assert "info" not in options

    @pytest.mark.parametrize("settings, expected", [
        (RenderSettings(select=True), "select: {style: 'os'}"),
        (
            RenderSettings(select=True, selected_items="cells", selection_mode="single", selection_info=False, deselect_on_backdrop_click=True),
            "select: {items: 'cell', style: 'single', info: false, blurable: true}",
        ),
        (RenderSettings(select=True, selected_items="column"), "select: {items: 'column', style: 'os'}"),
        (RenderSettings(select=True, selected_items="rows", selection_mode="Single"), "select: {style: 'single'}"),
    ])
    def test_select_block(self, render, car_table, settings, expected):
        _, _, options = render(car_table, settings)
        assert expected in options.serialize()

    @pytest.mark.parametrize("settings, expected", [
        (RenderSettings(scroll_size="200"), "scrollY: 200, scrollCollapse: false"),
        (RenderSettings(scroll_size="50vh", scroll_collapse=True), "scrollY: '50vh', scrollCollapse: true"),
        (RenderSettings(scroll_x=True), "scrollX: true, scrollCollapse: false"),
    ])
    def test_scroll_options(self, render, car_table, settings, expected):
        _, _, options = render(car_table, settings)
        assert expected in options.serialize()

    def test_no_scroll_options_by_default(self, render, car_table):
        _, _, options = render(car_table)
        assert "scrollCollapse" not in options

    def test_columns_array_covers_every_rendered_column(self, render, cars):
        table = TableModel(client_id="t", rows=cars, columns=[
            ColumnSpec(label="A"),
            ColumnSpec(label="Hidden", rendered=False, data_type="num"),
            ColumnSpec(label="B", width=50),
            ColumnSpec(label="C"),
        ])
        markup, _, options = render(table)
        assert len(soup(markup).thead.find_all("th")) == 3
        assert options.get("columns") == [None, "{'width':'50px'}", None]
        assert "columns: [null, {'width':'50px'}, null]" in options.serialize()

    def test_dom_text_without_type_fails(self, generator):
        table = TableModel(client_id="t", columns=[ColumnSpec(label="A", order_by="dom-text")])
        with pytest.raises(TableConfigurationError, match="data type"):
            generator.render(table)

    def test_raw_row_group(self, render, car_table):
        _, _, options = render(car_table, RenderSettings(row_group="{dataSrc: 'brand'}"))
        assert "orderFixed" not in options
        assert options.serialize().endswith("rowGroup: {dataSrc: 'brand'}")

    def test_non_ascii_digits_are_not_numbers(self, render, cars):
        table = TableModel(client_id="t", rows=cars, columns=[ColumnSpec(label="A", width="١٢")])
        _, _, options = render(table, RenderSettings(row_group="²", scroll_size="١٢"))
        serialized = options.serialize()
        assert "orderFixed" not in options
        assert serialized.endswith("rowGroup: ²")
        assert "scrollY: '١٢'" in serialized
        assert "columns: [{'width':'١٢'}]" in serialized

    def test_export_buttons_are_canonical(self):
        settings = RenderSettings(export_buttons=["print", "Column-Visibility", "excel", ""])
        assert settings.export_buttons == ("colvis", "excel", "print")

    def test_unknown_export_button(self):
        with pytest.raises(ValueError):
            RenderSettings(export_buttons="copy, fax")


class TestScript:
    def test_initialization_script(self, render, car_table):
        markup, _, options = render(car_table)
        script = soup(markup).script.string
        assert script == (
            "$(document).ready(function() {"
            "form_carsWidget = $('.formcarsTable');"
            "var wrapper = $('#form\\\\:cars_wrapper');"
            "wrapper.replaceWith(form_carsWidget);"
            f"var table = form_carsWidget.DataTable({{{options.serialize()}}});"
            "} );"
        )

    def test_custom_widget_var(self, render, car_table):
        markup, _, _ = render(car_table, RenderSettings(widget_var="cars", selected_column=1))
        script = soup(markup).script.string
        assert script.startswith("$(document).ready(function() {cars = $('.formcarsTable');")
        assert "initComplete: function( settings, json ) { cars.DataTable().columns(1).select(); }" in script

    def test_selected_row_object(self, render, car_table, cars):
        markup, _, _ = render(car_table, RenderSettings(select=True, selected_row=cars[0]))
        parsed = soup(markup)
        assert parsed.tbody.tr["class"] == ["bf-selected-row"]
        assert "form_carsWidget.DataTable().rows('.bf-selected-row').select();" in parsed.script.string

    def test_multi_column_search_wiring(self, render, cars):
        table = TableModel(client_id="t", rows=cars, columns=[
            ColumnSpec(label="Id", searchable=False),
            ColumnSpec(label="Brand", search_value="Op'el"),
            ColumnSpec(label="Model"),
            ColumnSpec(label="Price", search_value="9"),
        ])
        markup, _, _ = render(table, RenderSettings(multi_column_search=True))
        script = soup(markup).script.string
        assert "tWidget.find('.bf-multisearch').each(" in script
        assert "var cols=[1, 2, 3];" in script
        assert "var column=table.column(cols[i]);" in script
        assert "inputs[0].value='Op\\'el';table.column(1).search('Op\\'el').draw('page');" in script
        assert "inputs[2].value='9';table.column(3).search('9').draw('page');" in script
        assert len(soup(markup).tfoot.find_all("td")) == 3

    def test_search_inputs_skip_leading_non_searchable_columns(self, render, cars):
        table = TableModel(client_id="t", rows=cars, columns=[
            ColumnSpec(label="Id", searchable=False),
            ColumnSpec(label="Brand"),
            ColumnSpec(label="Hidden", rendered=False),
            ColumnSpec(label="Model"),
        ])
        markup, _, _ = render(table, RenderSettings(multi_column_search=True))
        parsed = soup(markup)
        assert [td.get_text() for td in parsed.tfoot.find_all("td")] == ["Brand", "Model"]
        script = parsed.script.string
        assert "var cols=[1, 2];" in script
        assert "table.columns().every" not in script
        assert "inputs[col]" not in script

    def test_no_search_wiring_by_default(self, render, car_table):
        markup, _, _ = render(car_table)
        assert "bf-multisearch" not in markup


class TestLifecycle:
    def test_render_matches_encode_steps(self, generator, car_table):
        settings = RenderSettings(select=True)
        render_pass = generator.encode_begin(car_table, settings)
        generator.encode_children(render_pass)
        generator.encode_end(render_pass)
        assert generator.render(car_table, settings) == render_pass.writer.getvalue()

    def test_renders_are_independent(self, generator, car_table):
        first = generator.render(car_table, RenderSettings(lang="de"), RenderContext())
        second = generator.render(car_table, RenderSettings(lang="de"), RenderContext())
        assert first == second

    def test_decode_delegates(self, generator, car_table):
        decoder = RecordingDecoder()
        assert generator.decode(car_table, RenderSettings(), {"page": 2}, decoder)
        assert decoder.calls == [("form:cars", {"page": 2})]

    def test_decode_skipped_when_disabled(self, generator, car_table):
        decoder = RecordingDecoder()
        assert not generator.decode(car_table, RenderSettings(disabled=True), {"page": 2}, decoder)
        assert decoder.calls == []
