"""
Prompt templates for the LLM-backed free-text triage.
"""

from .loader import render
from .templates import Template

__all__ = [
    "Template",
    "render",
]
