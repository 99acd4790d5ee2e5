"""Lingostage - multi-language routing for statically generated sites."""

__version__ = "0.1.0"
