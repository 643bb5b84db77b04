# isort: off
from .errors import TableConfigurationError, TableDefinitionError, TableMarkupError
from .models import ColumnChild, ColumnSpec, RenderContext, RenderSettings, TableModel
from .table_markup_generator import TableMarkupGenerator
# isort: on


__version__ = "0.1.0"

__all__ = [
    "TableConfigurationError",
    "TableDefinitionError",
    "TableMarkupError",
    "ColumnChild",
    "ColumnSpec",
    "RenderContext",
    "RenderSettings",
    "TableModel",
    "TableMarkupGenerator",
]
