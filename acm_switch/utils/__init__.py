"""Shared helpers: logging setup and atomic file writes."""
