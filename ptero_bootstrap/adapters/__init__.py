"""Adapters: bindings to external system tools."""
