import logging

from tablemarkup.models import RenderContext, RenderSettings
from tablemarkup.settings import get_settings


logger = logging.getLogger(__name__)


class LocaleResolver:
    """Chooses the DataTables translation file for a table.

    Precedence:
        1. `custom_lang_url`, used verbatim.
        2. An explicit `lang`, if a translation ships for it. An explicit but unsupported
           language disables translation instead of falling back to the ambient locale.
        3. The language of the request's ambient locale, if supported.

    Without any of these no `language` option is emitted and the widget stays in English.
    """

    def __init__(self, context: RenderContext) -> None:
        self.context = context
        self.resources = get_settings().resources

    def resolve(self, settings: RenderSettings) -> str | None:
        if settings.custom_lang_url and settings.custom_lang_url.strip():
            logger.debug("Using custom language url %s", settings.custom_lang_url)
            return settings.custom_lang_url

        if settings.lang and settings.lang.strip():
            if settings.lang in self.resources.supported_languages:
                return self.language_url(settings.lang)
            logger.debug("No translation available for explicit language %r", settings.lang)
            return None

        ambient = self.context.language
        if ambient in self.resources.supported_languages:
            return self.language_url(ambient)
        return None

    def language_url(self, lang: str) -> str:
        path = self.resources.locale_path_pattern.format(lang=lang)
        return self.context.resource_resolver(path, self.resources.library)
