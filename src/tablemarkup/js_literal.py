from __future__ import annotations

import re

from typing import Any, Dict, List, Mapping, Sequence, Union


INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
ASCII_DIGITS    = re.compile(r"[0-9]*")


class JsRaw(str):
    """A piece of JavaScript written into the options object verbatim (functions, selectors, user fragments)."""


JsValue = Union[None, bool, int, float, str, JsRaw, List['JsValue'], Dict[str, 'JsValue']]


def quote(value: str) -> str:
    """Single-quoted JavaScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
             .replace("'", "\\'")
             .replace("\n", "\\n")
             .replace("\r", "\\r")
             .replace("</", "<\\/")  # keep a literal </script> from closing the element
    )
    return f"'{escaped}'"


def to_js(value: Any) -> str:
    """Encode a Python value as a JavaScript literal.

    Object keys are written bare, matching the hand-written option objects DataTables
    documents, e.g. `{items: 'cell', style: 'os'}`.
    """
    if value is None:
        return "null"
    if isinstance(value, JsRaw):
        return str(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, Mapping):
        return "{" + ", ".join(f"{key}: {to_js(item)}" for key, item in value.items()) + "}"
    if isinstance(value, Sequence):
        return "[" + ", ".join(to_js(item) for item in value) + "]"
    raise TypeError(f"Cannot encode {type(value).__name__} as a JavaScript literal.")


def is_integer_literal(value: str) -> bool:
    """True for optionally signed integers written with ASCII digits, i.e. valid JavaScript numbers."""
    return INTEGER_LITERAL.fullmatch(value) is not None


def is_digits(value: str) -> bool:
    """True when the string is made of ASCII digits only. The empty string counts."""
    return ASCII_DIGITS.fullmatch(value) is not None
