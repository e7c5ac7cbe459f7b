"""Adapters connecting the domain to external services."""
