"""Configuration, logging and small shared helpers."""
