"""Prompt History: CRUD service for generated-media prompts."""

__version__ = "0.1.0"
