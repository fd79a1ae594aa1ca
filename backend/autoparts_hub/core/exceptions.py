"""
Custom exception hierarchy for the Auto-Parts Order Hub.

Exceptions are categorized as:
- RetryableError: Transient errors the caller may retry (catalog feed down,
  Supabase unavailable)
- NonRetryableError: Input or lookup errors where retrying won't help

A missing coefficient configuration is not an error: the store returns
None and the resolver falls back to the default markup.
"""


class AutopartsHubException(Exception):
    """Base exception for the Auto-Parts Order Hub."""
    pass


# ============================================
# RETRYABLE ERRORS
# ============================================
class RetryableError(AutopartsHubException):
    """
    Base class for errors the caller may retry.

    In-memory order and configuration state is never modified when one
    of these is raised.
    """
    pass


class CatalogFetchFailed(RetryableError):
    """
    Catalog feed could not be fetched or parsed.

    Retried with bounded backoff by the catalog client; on exhaustion the
    catalog cache keeps its last-known-good list.
    """
    def __init__(self, message: str, status_code: int = None, attempts: int = 1):
        self.reason = message
        self.status_code = status_code
        self.attempts = attempts
        super().__init__(f"Catalog fetch failed: {message}")


class PersistenceFailure(RetryableError):
    """Saving or reading a configuration/order record in Supabase failed."""
    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"Persistence on {table} failed: {message}")


# ============================================
# NON-RETRYABLE ERRORS
# ============================================
class NonRetryableError(AutopartsHubException):
    """Base class for errors that should NOT trigger retry."""
    pass


class ValidationError(NonRetryableError):
    """Invalid input data - retrying won't help."""
    pass


class InvalidLineInput(ValidationError):
    """
    Order line rejected: non-positive/non-integer quantity, or
    negative/non-numeric markup.

    The order is left unchanged; the caller should re-prompt.
    """
    def __init__(self, message: str, code: str | None = None):
        self.code = code
        super().__init__(message)


class ProductNotFoundError(NonRetryableError):
    """Product code not present in the catalog cache."""
    pass


class OrderNotFoundError(NonRetryableError):
    """Saved order not found for the user."""
    pass
