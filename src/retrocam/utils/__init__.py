"""Shared helpers for retrocam."""
