"""Account ledger and transfer orchestration service."""

__version__ = "0.1.0"
