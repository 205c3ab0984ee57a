"""Utility helpers for mdchangelog."""
