"""Adapters implementing the sitecaps ports."""
