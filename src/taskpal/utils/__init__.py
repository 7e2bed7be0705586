"""Utility helpers for taskpal."""
