"""Search service exceptions."""


class VedaError(Exception):
    """Base class for search service errors."""

    pass


class InvalidQueryError(VedaError):
    """Raised when a query is empty or whitespace-only."""

    pass


class SearchBackendError(VedaError):
    """Raised when the verse index cannot be queried."""

    pass
