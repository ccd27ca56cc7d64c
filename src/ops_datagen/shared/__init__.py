"""Shared models, exceptions, id allocation and logging utilities."""
