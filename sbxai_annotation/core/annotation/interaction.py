"""
Pointer interaction state machine.

Turns raw pointer events (canvas-relative screen coordinates) into at most
one draft annotation at a time. Only the bbox tool draws.
"""

import logging
from enum import Enum
from typing import Optional

from ...errors import ValidationError
from .state import Annotation, BBox, Label, Point, Tool
from .utils import screen_to_image

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    IDLE = "idle"
    DRAWING = "drawing"


def check_min_size(bbox: BBox, min_size: float):
    """
    Raises:
        ValidationError: ``bbox`` is not strictly larger than ``min_size``
            on both axes
    """
    if not (bbox.width > min_size and bbox.height > min_size):
        raise ValidationError(
            f"bbox {bbox.width:g}x{bbox.height:g} is not larger than {min_size:g}px"
        )


class PointerStateMachine:
    """
    IDLE -> DRAWING on pointer down with the bbox tool and a label selected,
    DRAWING -> DRAWING on every move, DRAWING -> IDLE on release.

    There is no cancel gesture; releasing under the size threshold is the
    only way to abandon a draft.
    """

    def __init__(self, min_size: float = 5):
        self.min_size = float(min_size)
        self.state = InteractionState.IDLE
        self.anchor: Optional[Point] = None
        self.draft: Optional[Annotation] = None

    @property
    def is_drawing(self) -> bool:
        return self.state is InteractionState.DRAWING

    def pointer_down(
        self, x: float, y: float, tool: Tool, label: Optional[Label], scale: float = 1.0
    ) -> Optional[Annotation]:
        """Start a draft. Returns it, or ``None`` if the event is ignored."""
        if label is None or tool is not Tool.BBOX:
            if tool in (Tool.POLYGON, Tool.TEXT):
                logger.debug("%s tool has no drawing behaviour", tool.value)
            return None
        self.anchor = screen_to_image(x, y, scale)
        self.draft = Annotation(
            label_id=label.id,
            bbox=BBox(self.anchor.x, self.anchor.y, 0, 0),
        )
        self.state = InteractionState.DRAWING
        return self.draft

    def pointer_move(self, x: float, y: float, scale: float = 1.0) -> Optional[Annotation]:
        """Re-derive the draft from the anchor and the current position."""
        if not self.is_drawing:
            return None
        current = screen_to_image(x, y, scale)
        self.draft = Annotation(
            label_id=self.draft.label_id,
            bbox=BBox.spanning(self.anchor, current),
        )
        return self.draft

    def pointer_up(
        self, x: Optional[float] = None, y: Optional[float] = None, scale: float = 1.0
    ) -> Optional[Annotation]:
        """
        Finish the drag.

        Returns the draft when it is large enough to keep; undersized drafts
        are treated as accidental clicks and dropped without an error.
        """
        if not self.is_drawing:
            return None
        if x is not None and y is not None:
            self.pointer_move(x, y, scale)

        draft = self.draft
        self.reset()
        try:
            check_min_size(draft.bbox, self.min_size)
        except ValidationError as e:
            logger.debug("Discarding draft: %s", e)
            return None
        return draft

    def reset(self):
        self.state = InteractionState.IDLE
        self.anchor = None
        self.draft = None
