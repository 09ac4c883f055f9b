"""
Core annotation module - UI-agnostic annotation editor.

This module provides the editor logic (labels, session store, pointer
interaction, rendering) that any host can drive: a GUI toolkit, a web
backend or the command line.
"""

from .controller import AnnotationToolController
from .events import AnnotationEvent, EventType, EventEmitter
from .interaction import InteractionState, PointerStateMachine
from .labels import LabelRegistry
from .renderer import CanvasRenderer, DrawCommand, RenderResult
from .state import (
    Annotation,
    BBox,
    EditorState,
    ImageInfo,
    Label,
    LabelFormat,
    Point,
    Tool,
)
from .store import AnnotationSessionStore

__all__ = [
    "AnnotationToolController",
    "AnnotationEvent",
    "EventType",
    "EventEmitter",
    "InteractionState",
    "PointerStateMachine",
    "LabelRegistry",
    "CanvasRenderer",
    "DrawCommand",
    "RenderResult",
    "Annotation",
    "BBox",
    "EditorState",
    "ImageInfo",
    "Label",
    "LabelFormat",
    "Point",
    "Tool",
    "AnnotationSessionStore",
]
