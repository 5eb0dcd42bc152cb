"""Playground web server accepting file uploads over HTTP."""

__version__ = "1.0.0"
