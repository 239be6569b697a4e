"""Shared helpers: logging setup and date parsing."""
