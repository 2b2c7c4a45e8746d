"""Hazard and risk register synthesis for Safe Work Method Statements."""

__version__ = "0.1.0"
