"""
Canvas adapter for the annotation controller.

Bridges the AnnotationToolController with a host canvas widget.
"""

from typing import Callable, Optional, Tuple

import numpy as np

from ..core.annotation import AnnotationEvent, AnnotationToolController, EventType


class CanvasAnnotationAdapter:
    """
    Adapter connecting AnnotationToolController to a canvas widget.

    Provides a thin layer that:
    - Converts window (client) mouse coordinates to canvas-relative ones
    - Forwards every redraw to the host's display callback
    - Forwards notifications to the host's toast callback
    """

    def __init__(
        self,
        controller: AnnotationToolController,
        update_image_callback: Optional[Callable[[np.ndarray], None]] = None,
        notify_callback: Optional[Callable[[str, str], None]] = None,
        canvas_origin: Tuple[float, float] = (0.0, 0.0),
    ):
        """
        Initialize adapter.

        Args:
            controller: Core annotation controller
            update_image_callback: Receives each rendered BGR raster
            notify_callback: Receives (level, message) for user-facing toasts
            canvas_origin: Client coordinates of the canvas' top-left corner
        """
        self.controller = controller
        self.update_image_callback = update_image_callback
        self.notify_callback = notify_callback
        self.canvas_origin = canvas_origin

        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for controller events."""
        self.controller.events.on(EventType.RENDERED, self._on_rendered)
        self.controller.events.on(EventType.NOTIFICATION, self._on_notification)

    def _on_rendered(self, event: AnnotationEvent):
        if self.update_image_callback:
            self.update_image_callback(event.data["result"].image)

    def _on_notification(self, event: AnnotationEvent):
        if self.notify_callback:
            self.notify_callback(event.data["level"], event.data["message"])

    def _to_canvas(self, client_x: float, client_y: float) -> Tuple[float, float]:
        left, top = self.canvas_origin
        return client_x - left, client_y - top

    # Mouse handlers, in client coordinates

    def on_mouse_down(self, client_x: float, client_y: float):
        self.controller.pointer_down(*self._to_canvas(client_x, client_y))

    def on_mouse_move(self, client_x: float, client_y: float):
        self.controller.pointer_move(*self._to_canvas(client_x, client_y))

    def on_mouse_up(self, client_x: Optional[float] = None, client_y: Optional[float] = None):
        if client_x is None or client_y is None:
            return self.controller.pointer_up()
        return self.controller.pointer_up(*self._to_canvas(client_x, client_y))

    def drag(self, start: Tuple[float, float], end: Tuple[float, float]):
        """Press at ``start``, move to ``end`` and release there."""
        self.on_mouse_down(*start)
        self.on_mouse_move(*end)
        return self.on_mouse_up(*end)

    def zoom_label(self) -> str:
        """Zoom as shown next to the zoom buttons, e.g. ``"120%"``."""
        return f"{round(self.controller.scale * 100)}%"

    def get_visualization(self) -> Optional[np.ndarray]:
        """Latest rendered raster, rendering once if nothing was drawn yet."""
        result = self.controller.last_render or self.controller.render()
        return result.image if result is not None else None
