"""Operational scripts for Lantern."""
