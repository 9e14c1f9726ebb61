"""Error taxonomy shared by every ledger module.

Callers distinguish three families, each calling for a different remedy:

* :class:`NotFoundError` - the referenced account or transfer does not exist.
* :class:`BusinessRuleError` - the request was understood but rejected by a
  ledger rule (insufficient funds, wrong status, ...).
* :class:`StoreFailureError` - the storage layer failed; the request may be
  retried later.
"""


class LedgerError(Exception):
    """Base class for all ledger domain errors."""


class NotFoundError(LedgerError):
    """Raised when a referenced record cannot be found."""


class BusinessRuleError(LedgerError):
    """Raised when an operation would violate a ledger rule."""


class StoreFailureError(LedgerError):
    """Raised when a storage collaborator fails."""


class ConcurrentUpdateError(StoreFailureError):
    """Raised when a record was modified by someone else since it was read."""
