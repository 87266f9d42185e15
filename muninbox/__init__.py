"""muninbox - multi-call Munin plugins."""

__version__ = "0.1.0"
