from __future__ import annotations

from typing import Any, Iterator, List, Self, Tuple

from tablemarkup.js_literal import JsRaw, to_js


class ClientOptions:
    """Ordered builder for the options object handed to `$(...).DataTable({...})`.

    Each fragment is contributed independently and in a fixed order; fragments whose value is
    None or an empty string are dropped rather than written as placeholders. Nothing is
    serialized until `serialize()` is called, and the emission order is exactly the order in
    which fragments were added.

    Usage:
        ```python
        options = (ClientOptions()
            .add("paging", True)
            .add("lengthMenu", JsRaw("[10, 25]"))
            .add("scrollY", None))      # dropped
        options.serialize()             # "paging: true, lengthMenu: [10, 25]"
        ```
    """

    def __init__(self) -> None:
        # key None marks a raw fragment written as-is (user supplied "key: value" text)
        self._entries: List[Tuple[str | None, Any]] = []

    @staticmethod
    def _is_empty(value: Any) -> bool:
        return value is None or (isinstance(value, str) and not value.strip())

    def add(self, key: str, value: Any) -> Self:
        if not self._is_empty(value):
            self._entries.append((key, value))
        return self

    def add_raw(self, fragment: str | None) -> Self:
        """Append a fragment of option-object source such as `deferRender: true, autoWidth: false`."""
        if not self._is_empty(fragment):
            self._entries.append((None, JsRaw(str(fragment).strip())))
        return self

    # ==============================
    # Inspection
    # ==============================

    def keys(self) -> List[str]:
        return [key for key, _ in self._entries if key is not None]

    def get(self, key: str, default: Any = None) -> Any:
        for entry_key, value in self._entries:
            if entry_key == key:
                return value
        return default

    def __contains__(self, key: object) -> bool:
        return key in self.keys()

    def __iter__(self) -> Iterator[Tuple[str | None, Any]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ==============================
    # Serialization
    # ==============================

    def serialize(self) -> str:
        return ", ".join(
            str(value) if key is None else f"{key}: {to_js(value)}"
            for key, value in self._entries
        )

    def __str__(self) -> str:
        return self.serialize()
