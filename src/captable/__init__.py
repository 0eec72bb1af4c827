"""Cap table ledger: share movement ledger and point-in-time position engine."""

__version__ = "0.1.0"
