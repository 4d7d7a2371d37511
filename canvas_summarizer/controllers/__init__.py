"""Inbound controllers."""
