"""Bundled Munin plugins."""
