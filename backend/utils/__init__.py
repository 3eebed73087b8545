"""Configuration, errors and security helpers."""
