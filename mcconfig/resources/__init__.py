"""Bundled default config documents."""
