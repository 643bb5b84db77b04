class TableMarkupError(Exception):
    """Base class for every error raised while generating table markup."""


class TableConfigurationError(TableMarkupError, ValueError):
    """The column or table declarations are invalid; the render pass is aborted.

    These are markup mistakes, not runtime conditions, so nothing retries them.
    """


class TableDefinitionError(TableMarkupError):
    """A declarative table definition file could not be read or understood."""
