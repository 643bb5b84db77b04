from __future__ import annotations

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tablemarkup.settings import TableDefaults, get_settings


# Export button aliases accepted in definitions, mapped to the DataTables Buttons extension names.
EXPORT_BUTTON_NAMES: Dict[str, str] = {
    "column-visibility" : "colvis",
    "columnvisibility"  : "colvis",
    "colvis"            : "colvis",
    "copy"              : "copy",
    "csv"               : "csv",
    "excel"             : "excel",
    "pdf"               : "pdf",
    "print"             : "print",
}
EXPORT_BUTTON_ORDER: Tuple[str, ...] = ("colvis", "copy", "csv", "excel", "pdf", "print")


def _defaults() -> TableDefaults:
    return get_settings().table


class ResponsiveLayout(BaseModel):
    """Bootstrap grid sizes of the wrapper placed around the table."""
    model_config = ConfigDict(frozen=True)

    span      : int | None = Field(default=None, description="Alias of col_md")
    col_xs    : int | None = Field(default=None)
    col_sm    : int | None = Field(default=None)
    col_md    : int | None = Field(default=None)
    col_lg    : int | None = Field(default=None)
    offset    : int | None = Field(default=None, description="Alias of offset_md")
    offset_xs : int | None = Field(default=None)
    offset_sm : int | None = Field(default=None)
    offset_md : int | None = Field(default=None)
    offset_lg : int | None = Field(default=None)


class RenderSettings(BaseModel):
    """Flat configuration snapshot for one render. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    # Paging and searching
    paginated                    : bool       = Field(default_factory=lambda: _defaults().paginated)
    page_length                  : int        = Field(default_factory=lambda: _defaults().page_length)
    page_length_menu             : str | None = Field(default_factory=lambda: _defaults().page_length_menu)
    info                         : bool       = Field(default_factory=lambda: _defaults().info)
    searching                    : bool       = Field(default_factory=lambda: _defaults().searching)
    multi_column_search          : bool       = Field(default=False)
    multi_column_search_position : str        = Field(default_factory=lambda: _defaults().multi_column_search_position)

    # Selection
    select                     : bool       = Field(default=False)
    selection_mode             : str        = Field(default_factory=lambda: _defaults().selection_mode, description="'single' or anything else for multi")
    selected_items             : str | None = Field(default=None, description="'row(s)', 'column(s)' or 'cell(s)'")
    selection_info             : bool       = Field(default=True)
    deselect_on_backdrop_click : bool       = Field(default=False)
    selected_row               : Any        = Field(default=None, description="Row object, index or selector selected initially")
    selected_column            : Any        = Field(default=None, description="Column index or selector selected initially")

    # Scrolling and layout
    scroll_size         : str | None             = Field(default=None, description="scrollY; digits are pixels")
    scroll_x            : bool                   = Field(default=False)
    scroll_collapse     : bool                   = Field(default=False)
    scroll_horizontally : bool                   = Field(default=False, description="Wrap the table in .table-responsive")
    responsive          : bool                   = Field(default=False)
    fixed_header        : bool                   = Field(default=False)
    layout              : ResponsiveLayout | None = Field(default=None)

    # Table chrome
    border          : bool       = Field(default=False)
    striped         : bool       = Field(default=True)
    row_highlight   : bool       = Field(default=True)
    style           : str | None = Field(default=None)
    style_class     : str | None = Field(default=None)
    row_style_class : str | None = Field(default=None, description="Row class; comma separated values alternate")
    disabled        : bool       = Field(default=False, description="Skip decoding of client requests")
    content_disabled : bool      = Field(default=False, description="Wrap the table in a disabled fieldset")

    # Client widget
    save_state      : bool            = Field(default=False)
    export_buttons  : Tuple[str, ...] = Field(default=())
    custom_options  : str | None      = Field(default=None, description="Raw fragment appended to the options object")
    row_group       : str | None      = Field(default=None, description="Column index, or a raw rowGroup literal")
    widget_var      : str | None      = Field(default=None)

    # Locale
    custom_lang_url : str | None = Field(default=None)
    lang            : str | None = Field(default=None)

    @field_validator("multi_column_search_position")
    @classmethod
    def validate_position(cls, v: str) -> str:
        if v.lower() not in ("top", "bottom", "both"):
            raise ValueError("multi_column_search_position must be one of 'top', 'bottom' or 'both'.")
        return v.lower()

    @field_validator("scroll_size", "row_group", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("export_buttons", mode="before")
    @classmethod
    def normalize_export_buttons(cls, v: Any) -> Tuple[str, ...]:
        """Accept "copy, csv" or ["copy", "csv"]; return the canonical names in toolbar order."""
        if v is None:
            return ()
        names: List[str] = v.split(",") if isinstance(v, str) else list(v)
        wanted = set()
        for name in names:
            key = str(name).strip().lower()
            if not key:
                continue
            if key not in EXPORT_BUTTON_NAMES:
                raise ValueError(f"Unknown export button '{name}'. Use one of {sorted(EXPORT_BUTTON_NAMES)}.")
            wanted.add(EXPORT_BUTTON_NAMES[key])
        return tuple(name for name in EXPORT_BUTTON_ORDER if name in wanted)

    @property
    def search_row_on_top(self) -> bool:
        return self.multi_column_search and self.multi_column_search_position in ("top", "both")

    @property
    def search_row_on_bottom(self) -> bool:
        return self.multi_column_search and self.multi_column_search_position in ("bottom", "both")
