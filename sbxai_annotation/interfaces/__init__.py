"""
Interfaces module - UI adapters for the annotation core.

Provides adapters to connect the core annotation logic
with a host canvas (desktop toolkit, web backend, CLI).
"""

from .canvas_adapter import CanvasAnnotationAdapter

__all__ = ['CanvasAnnotationAdapter']
