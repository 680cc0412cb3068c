"""Core configuration, tolerance rules and shared helpers."""
