"""Crosscheck implementations, grouped by the evidence they inspect."""
