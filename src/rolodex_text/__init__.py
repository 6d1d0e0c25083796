"""Rolodex Text - copy marked sections of styled rolodex entries into a template."""

__version__ = "0.1.0"
