"""Galley Cookbook: recipe deck, favorites and logbook service."""

__version__ = "0.1.0"
