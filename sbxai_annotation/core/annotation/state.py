"""
State for annotation editing.

Contains data classes for labels, annotations and the image being edited.
All geometry is kept in unscaled image-pixel units.
"""

import json
import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from ...errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_LABEL_COLOR = "#FF0000"

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


def normalize_color(color: Optional[str]) -> str:
    """
    Return ``color`` if it is a ``#RGB`` or ``#RRGGBB`` string, else the
    default label colour. Empty values fall back silently, anything else
    with a warning.
    """
    if not color:
        return DEFAULT_LABEL_COLOR
    if isinstance(color, str) and _HEX_COLOR.fullmatch(color.strip()):
        return color.strip()
    logger.warning("Unsupported label color %r, using %s", color, DEFAULT_LABEL_COLOR)
    return DEFAULT_LABEL_COLOR


class LabelFormat(Enum):
    """Geometry a label expects its annotations to carry."""

    BBOX = "bbox"
    POLYGON = "polygon"
    TEXT = "text"


class Tool(Enum):
    """Editor tools. Only BBOX draws; POLYGON and TEXT are selectable no-ops."""

    SELECT = "select"
    BBOX = "bbox"
    POLYGON = "polygon"
    TEXT = "text"


@dataclass(frozen=True)
class Label:
    id: int
    name: str
    color: str
    expected_format: LabelFormat = LabelFormat.BBOX
    description: Optional[str] = None

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "expected_format": self.expected_format.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            id=int(data["id"]),
            name=data["name"],
            color=normalize_color(data.get("color")),
            expected_format=LabelFormat(data.get("expected_format") or "bbox"),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self):
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict):
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True)
class BBox:
    """Top-left corner plus extent."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def spanning(cls, a: Point, b: Point) -> "BBox":
        """Axis-aligned rectangle with ``a`` and ``b`` as opposite corners."""
        return cls(
            x=min(a.x, b.x),
            y=min(a.y, b.y),
            width=abs(b.x - a.x),
            height=abs(b.y - a.y),
        )

    def scaled(self, scale: float) -> "BBox":
        return BBox(self.x * scale, self.y * scale, self.width * scale, self.height * scale)

    def to_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            x=data["x"], y=data["y"], width=data["width"], height=data["height"]
        )


def _maybe_json(value):
    # Items may come back with geometry still JSON-encoded as it was sent
    if isinstance(value, str):
        return json.loads(value)
    return value


@dataclass
class Annotation:
    """
    One annotation on an image.

    Exactly one of ``bbox``, ``polygon`` or ``text`` is expected to be set.
    ``id`` stays ``None`` until the annotation is persisted.
    """

    label_id: int
    bbox: Optional[BBox] = None
    polygon: Optional[List[Point]] = None
    text: Optional[str] = None
    confidence: float = 1.0
    id: Optional[int] = None

    @property
    def geometry_kind(self) -> Optional[LabelFormat]:
        if self.bbox is not None:
            return LabelFormat.BBOX
        if self.polygon is not None:
            return LabelFormat.POLYGON
        if self.text is not None:
            return LabelFormat.TEXT
        return None

    def validate(self):
        """
        Raises:
            ValidationError: geometry missing, ambiguous or out of range
        """
        present = [g for g in (self.bbox, self.polygon, self.text) if g is not None]
        if len(present) != 1:
            raise ValidationError(
                f"Annotation must carry exactly one geometry, got {len(present)}"
            )
        if self.bbox is not None and (self.bbox.width < 0 or self.bbox.height < 0):
            raise ValidationError(f"Negative bbox extent: {self.bbox}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValidationError(f"Confidence out of [0, 1]: {self.confidence}")

    def with_id(self, annotation_id: int) -> "Annotation":
        return replace(self, id=annotation_id)

    def form_fields(self) -> Dict[str, Any]:
        """Fields of the multipart body used to persist this annotation."""
        fields: Dict[str, Any] = {"label_id": str(self.label_id)}
        if self.bbox is not None:
            fields["bbox"] = json.dumps(self.bbox.to_dict())
        if self.polygon is not None:
            fields["polygon"] = json.dumps([p.to_dict() for p in self.polygon])
        if self.text is not None:
            fields["text"] = self.text
        fields["confidence"] = str(float(self.confidence))
        return fields

    def to_dict(self):
        return {
            "id": self.id,
            "label_id": self.label_id,
            "bbox": self.bbox.to_dict() if self.bbox is not None else None,
            "polygon": (
                [p.to_dict() for p in self.polygon] if self.polygon is not None else None
            ),
            "text": self.text,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict):
        bbox = _maybe_json(data.get("bbox"))
        polygon = _maybe_json(data.get("polygon"))
        confidence = data.get("confidence")
        return cls(
            id=data.get("id"),
            label_id=int(data["label_id"]),
            bbox=BBox.from_dict(bbox) if bbox else None,
            polygon=[Point.from_dict(p) for p in polygon] if polygon else None,
            text=data.get("text"),
            confidence=float(confidence) if confidence is not None else 1.0,
        )


@dataclass
class ImageInfo:
    id: str
    original_filename: str = "image.jpg"
    width: int = 640
    height: int = 640

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            id=str(data["id"]),
            original_filename=data.get("original_filename") or "image.jpg",
            width=int(data.get("image_width") or 640),
            height=int(data.get("image_height") or 640),
        )


@dataclass
class EditorState:
    """UI-side selections of one editor view. Annotations live in the store."""

    image: Optional[ImageInfo] = None
    session_id: Optional[str] = None
    tool: Tool = Tool.SELECT
    selected_label: Optional[Label] = None
    scale: float = 1.0

    def to_dict(self):
        return {
            "image_id": self.image.id if self.image is not None else None,
            "session_id": self.session_id,
            "tool": self.tool.value,
            "selected_label_id": (
                self.selected_label.id if self.selected_label is not None else None
            ),
            "scale": self.scale,
        }
