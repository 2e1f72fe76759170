"""Shared utilities: logging, settings persistence and validation."""
