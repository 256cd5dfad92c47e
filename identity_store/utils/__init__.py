"""Shared helpers: rights enumeration and secret generation."""
