from typing import List

from tablemarkup.models import ResponsiveLayout


SIZES = ("xs", "sm", "md", "lg")

def responsive_style_class(layout: ResponsiveLayout | None) -> str:
    """Bootstrap grid classes for the wrapper div, e.g. 'col-sm-12 col-md-6 col-md-offset-3'.

    `span` and `offset` are shorthands for the md breakpoint; an explicit col_md / offset_md wins.
    Returns an empty string when no layout is configured, in which case no wrapper is written.
    """
    if layout is None:
        return ""
    classes: List[str] = []
    for size in SIZES:
        cols = getattr(layout, f"col_{size}")
        if size == "md" and cols is None:
            cols = layout.span
        if cols is not None:
            classes.append(f"col-{size}-{cols}")
    for size in SIZES:
        offset = getattr(layout, f"offset_{size}")
        if size == "md" and offset is None:
            offset = layout.offset
        if offset is not None:
            classes.append(f"col-{size}-offset-{offset}")
    return " ".join(classes)
