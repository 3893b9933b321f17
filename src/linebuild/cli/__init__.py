"""Linebuild command-line interface."""
