class SpellbookError(Exception):
    """Base class for failures raised by the spell list screen."""


class CatalogError(SpellbookError):
    """The remote catalog could not be fetched or parsed."""


class StorageError(SpellbookError):
    """The local key-value store could not be read or written."""
