"""Adapters to board services, storage and output formats."""
