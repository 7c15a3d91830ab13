"""Utility helpers for Sketchbox."""
