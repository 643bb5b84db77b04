from __future__ import annotations

import logging

from collections.abc import Mapping
from io import StringIO
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Self, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from tablemarkup.errors import TableDefinitionError
from tablemarkup.models import ColumnSpec, RenderSettings, TableModel


logger = logging.getLogger(__name__)


def field_accessor(path: str):
    """Accessor following a dotted path through mappings and attributes; a missing step yields None."""
    steps = path.split(".")

    def access(row: Any) -> Any:
        value = row
        for step in steps:
            if value is None:
                return None
            if isinstance(value, Mapping):
                value = value.get(step)
            else:
                value = getattr(value, step, None)
        return value

    return access


class ColumnDefinition(BaseModel):
    """A column as written in a definition file: ColumnSpec attributes plus an optional `field` path."""
    model_config = ConfigDict(extra="allow")

    field: str | None = Field(default=None, description="Dotted path of the row value shown in the column")

    def to_column_spec(self) -> ColumnSpec:
        attributes: Dict[str, Any] = dict(self.model_extra or {})
        if self.field:
            attributes.setdefault("accessor", field_accessor(self.field))
            attributes.setdefault("value_expression", f"#{{row.{self.field}}}")
        return ColumnSpec.model_validate(attributes)


class TableDefinition(BaseModel):
    """Declarative description of a table, as loaded from YAML or JSON.

    Example:
        ```yaml
        id: form:cars
        caption: Used cars
        settings:
          page_length: 25
          export_buttons: copy, csv
        columns:
          - field: brand
            order: asc
          - field: price
            data_type: num
            width: 80
        rows:
          - {brand: Volkswagen, price: 12000}
        ```
    """
    model_config = ConfigDict(populate_by_name=True)

    _yaml: ClassVar[YAML] = YAML(typ="safe")

    client_id     : str                    = Field(..., alias="id")
    caption       : str | None             = Field(default=None)
    header_markup : str | None             = Field(default=None)
    settings      : Dict[str, Any]         = Field(default_factory=dict)
    columns       : List[ColumnDefinition] = Field(default_factory=list)
    rows          : List[Any]              = Field(default_factory=list)

    @classmethod
    def from_str(cls, text: str) -> Self:
        try:
            data = cls._yaml.load(StringIO(text))
        except YAMLError as e:
            raise TableDefinitionError(f"Table definition is not valid YAML: {e}") from e
        if not isinstance(data, Mapping):
            raise TableDefinitionError("Table definition must be a mapping with at least an 'id'.")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise TableDefinitionError(f"Invalid table definition: {e}") from e

    @classmethod
    def from_path(cls, path: str | Path) -> Self:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise TableDefinitionError(f"Cannot read table definition {path}: {e}") from e
        logger.debug("Loading table definition from %s", path)
        return cls.from_str(text)

    @classmethod
    def load_rows(cls, path: str | Path) -> List[Any]:
        """Rows kept in a separate YAML or JSON file: a list of mappings."""
        try:
            data = cls._yaml.load(Path(path).read_text(encoding="utf-8"))
        except (OSError, YAMLError) as e:
            raise TableDefinitionError(f"Cannot read rows from {path}: {e}") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise TableDefinitionError(f"Rows file {path} must contain a list.")
        return data

    def to_table(self, rows: Sequence[Any] | None = None) -> TableModel:
        try:
            columns = [column.to_column_spec() for column in self.columns]
        except ValidationError as e:
            raise TableDefinitionError(f"Invalid column in table definition {self.client_id}: {e}") from e
        return TableModel(
            client_id=self.client_id,
            caption=self.caption,
            header_markup=self.header_markup,
            columns=columns,
            rows=list(rows) if rows is not None else self.rows,
        )

    def to_settings(self) -> RenderSettings:
        try:
            return RenderSettings.model_validate(self.settings)
        except ValidationError as e:
            raise TableDefinitionError(f"Invalid settings in table definition {self.client_id}: {e}") from e
