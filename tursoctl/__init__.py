"""Flag validation, prompts, tables, plan usage and self-update helpers for a Turso tool."""

__version__ = "0.1.0"