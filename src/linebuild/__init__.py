"""Linebuild — validation engine and promotion gate for line build workflows."""

__version__ = "0.1.0-dev"
