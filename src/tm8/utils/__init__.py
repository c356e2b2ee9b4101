"""Utility packages for the TM8 graph core."""
