"""Rendering of model output for the terminal."""

from .markdown import MarkdownRenderer
from .palette import Palette

__all__ = ["MarkdownRenderer", "Palette"]
