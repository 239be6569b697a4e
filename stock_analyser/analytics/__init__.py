"""Derived analytics: linear scans over an ordered store snapshot."""
