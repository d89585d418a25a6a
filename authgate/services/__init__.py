"""Integrations with services outside the gate."""
