"""Discover, order and read versioned up/down database migration files."""

__version__ = "0.1.0"