"""Renderers for finished spans."""

from .console import Verbosity, render_spans

__all__ = ["Verbosity", "render_spans"]
