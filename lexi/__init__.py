"""Lexi Legal AI: AI-assisted legal drafting and document risk analysis."""

__version__ = "1.0.0"
