"""Shared helpers used across dotversion modules."""
