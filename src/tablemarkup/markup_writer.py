from html import escape
from io import StringIO
from typing import Any, List, Self


RAW_TEXT_ELEMENTS = ("script", "style")

class MarkupWriter:
    """Append-only HTML writer modelled on a servlet response writer.

    Attributes may only be written while the start tag of the current element is still open,
    i.e. between `start_element()` and the first piece of content or `end_element()`. Nothing
    that has been written can be taken back; a failed render simply abandons the buffer.

    Usage:
        ```python
        w = MarkupWriter()
        w.start_element("td")
        w.write_attribute("class", "amount")
        w.write_text("4 < 5")
        w.end_element("td")
        w.getvalue()  # '<td class="amount">4 &lt; 5</td>'
        ```
    """

    def __init__(self) -> None:
        self._buffer: StringIO = StringIO()
        self._open_elements: List[str] = []
        self._start_tag_open: bool = False

    @classmethod
    def create(cls) -> Self:
        return cls()

    # ==============================
    # Elements
    # ==============================

    def start_element(self, name: str) -> Self:
        self._close_start_tag()
        self._buffer.write(f"<{name}")
        self._open_elements.append(name)
        self._start_tag_open = True
        return self

    def write_attribute(self, name: str, value: Any) -> Self:
        """Write an attribute of the element just started; None values are skipped."""
        if not self._start_tag_open:
            raise RuntimeError(f"Cannot write attribute '{name}' after the start tag has been closed.")
        if value is None:
            return self
        self._buffer.write(f' {name}="{escape(str(value), quote=True)}"')
        return self

    def end_element(self, name: str) -> Self:
        if not self._open_elements or self._open_elements[-1] != name:
            current = self._open_elements[-1] if self._open_elements else None
            raise RuntimeError(f"Cannot end <{name}>; the innermost open element is <{current}>.")
        self._close_start_tag()
        self._open_elements.pop()
        self._buffer.write(f"</{name}>")
        return self

    # ==============================
    # Content
    # ==============================

    def write_text(self, text: Any) -> Self:
        """Write escaped text. Inside <script> and <style> text is written verbatim."""
        if text is None:
            return self
        self._close_start_tag()
        if self._open_elements and self._open_elements[-1] in RAW_TEXT_ELEMENTS:
            self._buffer.write(str(text))
        else:
            self._buffer.write(escape(str(text), quote=False))
        return self

    def write_markup(self, markup: str | None) -> Self:
        """Write pre-rendered markup without escaping."""
        if not markup:
            return self
        self._close_start_tag()
        self._buffer.write(markup)
        return self

    # ==============================
    # State
    # ==============================

    @property
    def open_elements(self) -> List[str]:
        return list(self._open_elements)

    def getvalue(self) -> str:
        self._close_start_tag()
        return self._buffer.getvalue()

    def __str__(self) -> str:
        return self.getvalue()

    def _close_start_tag(self) -> None:
        if self._start_tag_open:
            self._buffer.write(">")
            self._start_tag_open = False
