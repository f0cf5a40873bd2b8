"""Catalog exceptions"""


class CatalogError(Exception):
    """Base class for all catalog errors"""


class SyncError(CatalogError):
    """Raised when talking to the remote snippet store fails.

    Covers timeouts, unreachable hosts, malformed responses and rejected
    writes. The original exception is chained as ``__cause__``.
    """


class SnippetValidationError(SyncError):
    """Raised when the remote store rejects a snippet payload"""
