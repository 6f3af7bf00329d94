"""Utility modules for the Explorer API."""
