"""Diagnostic assist backed by Google Gemini."""

from .gemini import get_diagnostic_suggestions

__all__ = ["get_diagnostic_suggestions"]
