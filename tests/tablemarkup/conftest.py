from typing import List

import pytest

from tablemarkup.environment import Environment
from tablemarkup.models import ColumnSpec, RenderContext, RenderSettings, TableModel
from tablemarkup.settings import get_settings, reset_settings
from tablemarkup.table_markup_generator import TableMarkupGenerator


# ===========================================================================================
# ENV AND SETTINGS
# ===========================================================================================

ENV = Environment.TESTING.activate()
reset_settings()
SETTINGS = get_settings()


# ===========================================================================================
# FIXTURES
# ===========================================================================================

@pytest.fixture
def generator() -> TableMarkupGenerator:
    return TableMarkupGenerator()


@pytest.fixture
def cars() -> List[dict]:
    return [
        {"brand": "Volkswagen", "model": "Golf",  "price": 12000},
        {"brand": "Opel",       "model": "Astra", "price": 9500},
        {"brand": "Fiat",       "model": "Panda", "price": 4300},
    ]


@pytest.fixture
def car_columns() -> List[ColumnSpec]:
    return [
        ColumnSpec(label="Brand", accessor=lambda r: r["brand"]),
        ColumnSpec(label="Model", accessor=lambda r: r["model"]),
        ColumnSpec(label="Price", accessor=lambda r: r["price"]),
    ]


@pytest.fixture
def car_table(car_columns, cars) -> TableModel:
    return TableModel(client_id="form:cars", columns=car_columns, rows=cars)


@pytest.fixture
def render(generator):
    """Render a table and return (markup, render pass, client options)."""
    def _render(table: TableModel, settings: RenderSettings | None = None, context: RenderContext | None = None):
        render_pass = generator.encode_begin(table, settings or RenderSettings(), context)
        options = generator.build_options(render_pass)
        generator.encode_end(render_pass)
        return render_pass.writer.getvalue(), render_pass, options
    return _render
