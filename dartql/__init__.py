"""Generate GraphQL fragments and operation documents for Flutter clients."""

__version__ = "0.1.0"
