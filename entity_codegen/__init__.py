"""Generate Go service layers and PostgreSQL migrations from entity definitions."""

__version__ = "0.1.0"
