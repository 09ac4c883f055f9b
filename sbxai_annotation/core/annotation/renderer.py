"""
Canvas renderer.

Maps (image, annotations, draft, labels, scale) to drawing operations and
paints them onto a BGR raster with OpenCV. Every call is a full redraw; no
state is kept between calls and stored geometry is never modified.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import cv2
import numpy as np

from .state import Annotation, ImageInfo, Label, normalize_color
from .utils import canvas_size, grid_lines, hex_to_bgr

logger = logging.getLogger(__name__)

Rect = Tuple[float, float, float, float]


@dataclass(frozen=True)
class DrawCommand:
    """One drawing operation in canvas (scaled) pixel units."""

    op: str
    color: str
    rect: Optional[Rect] = None
    points: Optional[Tuple[Tuple[float, float], ...]] = None
    text: Optional[str] = None
    alpha: float = 1.0
    line_width: int = 1


@dataclass
class RenderResult:
    image: np.ndarray
    commands: List[DrawCommand] = field(default_factory=list)

    @property
    def size(self) -> Tuple[int, int]:
        height, width = self.image.shape[:2]
        return width, height

    def find(self, op: str) -> List[DrawCommand]:
        return [c for c in self.commands if c.op == op]

    def save(self, path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(str(path), self.image):
            raise IOError(f"Could not write {path}")
        return path


class CanvasRenderer:
    def __init__(
        self,
        grid_size: float = 20,
        background: str = "#f0f0f0",
        grid_color: str = "#e0e0e0",
        fill_alpha: float = 0.2,
        line_width: int = 2,
    ):
        self.grid_size = float(grid_size)
        self.background = background
        self.grid_color = grid_color
        self.fill_alpha = float(fill_alpha)
        self.line_width = int(line_width)

    @classmethod
    def from_config(cls, cfg):
        return cls(
            grid_size=cfg.render.grid_size,
            background=cfg.render.background,
            grid_color=cfg.render.grid_color,
            fill_alpha=cfg.render.fill_alpha,
            line_width=cfg.render.line_width,
        )

    def render(
        self,
        image: ImageInfo,
        annotations: Iterable[Annotation],
        draft: Optional[Annotation],
        labels: Iterable[Label],
        scale: float = 1.0,
        draft_label: Optional[Label] = None,
    ) -> RenderResult:
        """
        Redraw the whole canvas.

        Args:
            image: Image being annotated (only its size is used)
            annotations: Persisted annotations, drawn in order
            draft: Annotation under construction, or None
            labels: Known labels; annotations with unknown labels are skipped
            scale: Zoom factor applied to every coordinate
            draft_label: Label for the draft (the selected one); looked up
                by the draft's ``label_id`` when omitted

        Returns:
            RenderResult with the BGR raster and the draw commands
        """
        by_id: Dict[int, Label] = {label.id: label for label in labels}
        width, height = canvas_size(image.width, image.height, scale)

        commands = [DrawCommand("clear", self.background, rect=(0, 0, width, height))]
        commands.extend(self._grid(width, height, scale))

        for annotation in annotations:
            label = by_id.get(annotation.label_id)
            if label is None:
                continue
            commands.extend(self._annotation(annotation, label, scale))

        if draft is not None:
            label = draft_label if draft_label is not None else by_id.get(draft.label_id)
            if label is not None:
                commands.extend(self._annotation(draft, label, scale))

        canvas = np.zeros((height, width, 3), dtype=np.uint8)
        for command in commands:
            self._paint(canvas, command)
        return RenderResult(image=canvas, commands=commands)

    def _grid(self, width: int, height: int, scale: float) -> List[DrawCommand]:
        step = self.grid_size * scale
        commands = []
        for x in grid_lines(width, step):
            commands.append(DrawCommand("line", self.grid_color, rect=(x, 0, x, height)))
        for y in grid_lines(height, step):
            commands.append(DrawCommand("line", self.grid_color, rect=(0, y, width, y)))
        return commands

    def _annotation(self, annotation: Annotation, label: Label, scale: float) -> List[DrawCommand]:
        commands = []
        if annotation.bbox is not None:
            box = annotation.bbox.scaled(scale)
            rect = (box.x, box.y, box.width, box.height)
            commands.append(
                DrawCommand("stroke_rect", label.color, rect=rect, line_width=self.line_width)
            )
            commands.append(
                DrawCommand("fill_rect", label.color, rect=rect, alpha=self.fill_alpha)
            )
            commands.append(
                DrawCommand("text", label.color, rect=(box.x, box.y - 5, 0, 0), text=label.name)
            )
        if annotation.polygon:
            points = tuple((p.x * scale, p.y * scale) for p in annotation.polygon)
            commands.append(
                DrawCommand(
                    "stroke_polygon", label.color, points=points, line_width=self.line_width
                )
            )
            commands.append(
                DrawCommand("fill_polygon", label.color, points=points, alpha=self.fill_alpha)
            )
        return commands

    def _paint(self, canvas: np.ndarray, command: DrawCommand):
        color = hex_to_bgr(normalize_color(command.color))
        op = command.op

        if op == "clear":
            canvas[:] = color
        elif op == "line":
            x1, y1, x2, y2 = (int(round(v)) for v in command.rect)
            cv2.line(canvas, (x1, y1), (x2, y2), color, 1)
        elif op in ("stroke_rect", "fill_rect"):
            x, y, w, h = command.rect
            pt1 = (int(round(x)), int(round(y)))
            pt2 = (int(round(x + w)), int(round(y + h)))
            if op == "stroke_rect":
                cv2.rectangle(canvas, pt1, pt2, color, command.line_width)
            else:
                overlay = canvas.copy()
                cv2.rectangle(overlay, pt1, pt2, color, -1)
                self._blend(canvas, overlay, command.alpha)
        elif op == "text":
            x, y = command.rect[:2]
            cv2.putText(
                canvas,
                command.text,
                (int(round(x)), int(round(y))),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.5,
                color,
                1,
                cv2.LINE_AA,
            )
        elif op in ("stroke_polygon", "fill_polygon"):
            pts = np.rint(np.array(command.points)).astype(np.int32).reshape((-1, 1, 2))
            if op == "stroke_polygon":
                cv2.polylines(canvas, [pts], True, color, command.line_width)
            else:
                overlay = canvas.copy()
                cv2.fillPoly(overlay, [pts], color)
                self._blend(canvas, overlay, command.alpha)
        else:
            raise ValueError(f"Unknown draw op: {op}")

    @staticmethod
    def _blend(canvas: np.ndarray, overlay: np.ndarray, alpha: float):
        cv2.addWeighted(overlay, alpha, canvas, 1 - alpha, 0, dst=canvas)
