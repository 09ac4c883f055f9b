"""
Event system for the annotation editor.

Lets the editor core notify whatever UI hosts it about state changes
without depending on a specific UI framework.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can occur while editing an image."""

    # Loading
    LABELS_LOADED = "labels_loaded"
    SESSION_OPENED = "session_opened"
    ANNOTATIONS_LOADED = "annotations_loaded"

    # Drawing
    DRAFT_STARTED = "draft_started"
    DRAFT_UPDATED = "draft_updated"
    DRAFT_DISCARDED = "draft_discarded"

    # Annotation list
    ANNOTATION_ADDED = "annotation_added"
    ANNOTATION_REMOVED = "annotation_removed"

    # Selections
    TOOL_SELECTED = "tool_selected"
    LABEL_SELECTED = "label_selected"
    SCALE_CHANGED = "scale_changed"

    # Output
    RENDERED = "rendered"
    NOTIFICATION = "notification"
    EDITOR_CLOSED = "editor_closed"


@dataclass
class AnnotationEvent:
    """
    One editor event.

    ``data`` keys by type: ``NOTIFICATION`` carries ``level`` and ``message``
    (plus ``error`` for failures), ``RENDERED`` carries ``result``, the
    annotation events carry ``index`` and ``annotation`` as a dict.
    """

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


Listener = Callable[[AnnotationEvent], None]


class EventEmitter:
    """
    Per-editor listener table keyed by :class:`EventType`.

    Listeners run synchronously, in subscription order, on the thread that
    emits. A listener that raises is logged and skipped.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Listener]] = defaultdict(list)

    def on(self, event_type: EventType, callback: Listener) -> Callable[[], None]:
        """Subscribe ``callback``; returns a function that unsubscribes it."""
        self._listeners[event_type].append(callback)
        return lambda: self.off(event_type, callback)

    def off(self, event_type: EventType, callback: Listener):
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def listener_count(self, event_type: EventType) -> int:
        return len(self._listeners.get(event_type, []))

    def emit(self, event: AnnotationEvent):
        for callback in tuple(self._listeners.get(event.event_type, ())):
            try:
                callback(event)
            except Exception:
                logger.exception("%s listener %r failed", event.event_type.value, callback)

    def clear(self):
        self._listeners.clear()
