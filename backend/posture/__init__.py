"""Posture analysis service."""
