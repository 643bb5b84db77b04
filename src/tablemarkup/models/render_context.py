from __future__ import annotations

from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from tablemarkup.settings import get_settings


ResourceResolver = Callable[[str, str | None], str]


def default_resource_resolver(path: str, library: str | None = None) -> str:
    return get_settings().resources.resolve(path, library)


class RenderContext(BaseModel):
    """What the hosting application knows about the current request."""
    model_config = ConfigDict(frozen=True)

    locale            : str | None       = Field(default=None, description="Ambient locale, e.g. 'de', 'de_DE' or 'pt-BR'")
    resource_resolver : ResourceResolver = Field(default=default_resource_resolver, description="Maps a library resource path to its URL")

    @property
    def language(self) -> str | None:
        """The language part of the ambient locale, lower-cased."""
        if not self.locale:
            return None
        return self.locale.replace("-", "_").split("_", 1)[0].lower() or None
