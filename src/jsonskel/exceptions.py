"""Exception hierarchy for jsonskel."""


class JsonSkelError(Exception):
    """Base exception for all jsonskel errors."""


class CatalogLookupError(JsonSkelError):
    """Raised when the project type catalog cannot answer a lookup."""


class ClipboardError(JsonSkelError):
    """Raised when the generated skeleton cannot be delivered to the clipboard."""


class DocumentError(JsonSkelError):
    """Raised when the active document cannot be read or has no known format."""
