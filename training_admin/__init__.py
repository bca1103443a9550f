"""Training Admin API - single-tenant training administration console."""

__version__ = "0.1.0"
