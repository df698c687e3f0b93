"""Generative backend clients."""

from .gemini import generate_grounded, parse_grounded_response

__all__ = ["generate_grounded", "parse_grounded_response"]
