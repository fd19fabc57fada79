"""Dividend reinvestment portfolio projections."""

__version__ = "0.1.0"
