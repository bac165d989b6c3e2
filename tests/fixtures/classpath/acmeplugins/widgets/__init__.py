"""Fixture widgets."""
