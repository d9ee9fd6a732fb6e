"""Shared utilities: constants, exceptions and logging."""
