"""Geometry over normalized command sequences."""
