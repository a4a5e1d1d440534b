"""Helpers for Athena: SQL text utilities, result rendering and workgroup requests."""

__version__ = "0.1.0"

__all__ = ["render", "sqltext", "workgroup"]