"""GitBrand - conversational assistant for a public code-hosting profile."""

__version__ = "0.1.0"
