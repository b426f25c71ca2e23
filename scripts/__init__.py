"""Operational scripts (data generation and loading)."""
