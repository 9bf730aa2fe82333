"""Compose merged configuration from bundle directories."""
