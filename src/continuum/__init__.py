"""Continuum narrative framework: dislocation severity analysis per ticker."""

__version__ = "0.1.0"
