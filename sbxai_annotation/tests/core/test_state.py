"""
Tests for the annotation data classes.
"""

import json

import pytest

from sbxai_annotation.core.annotation import (
    Annotation,
    BBox,
    EditorState,
    ImageInfo,
    Label,
    LabelFormat,
    Point,
    Tool,
)
from sbxai_annotation.errors import ValidationError


class TestLabel:
    def test_from_dict_defaults(self):
        label = Label.from_dict({"id": "3", "name": "car"})
        assert label.id == 3
        assert label.color == "#FF0000"
        assert label.expected_format is LabelFormat.BBOX
        assert label.description is None

    def test_to_dict(self):
        label = Label(3, "plate", "#00FF00", LabelFormat.TEXT, "License plate")
        assert label.to_dict() == {
            "id": 3,
            "name": "plate",
            "color": "#00FF00",
            "expected_format": "text",
            "description": "License plate",
        }

    def test_from_dict_keeps_hex_color(self):
        assert Label.from_dict({"id": 3, "name": "car", "color": "#00ff80"}).color == "#00ff80"
        assert Label.from_dict({"id": 3, "name": "car", "color": "#0f8"}).color == "#0f8"

    @pytest.mark.parametrize("color", ["red", "rgb(255, 0, 0)", "#GG0000", 255])
    def test_from_dict_replaces_unsupported_color(self, color):
        label = Label.from_dict({"id": 3, "name": "car", "color": color})
        assert label.color == "#FF0000"

    def test_from_dict_rejects_unknown_format(self):
        with pytest.raises(ValueError):
            Label.from_dict({"id": 3, "name": "car", "expected_format": "classification"})


class TestBBox:
    def test_spanning_normalizes_corners(self):
        bbox = BBox.spanning(Point(300, 250), Point(100, 100))
        assert bbox == BBox(100, 100, 200, 150)

    def test_scaled(self):
        assert BBox(10, 20, 30, 40).scaled(2) == BBox(20, 40, 60, 80)


class TestAnnotation:
    def test_form_fields_for_bbox(self):
        annotation = Annotation(label_id=3, bbox=BBox(100, 100, 200, 150))
        fields = annotation.form_fields()

        assert fields["label_id"] == "3"
        assert json.loads(fields["bbox"]) == {
            "x": 100,
            "y": 100,
            "width": 200,
            "height": 150,
        }
        assert fields["confidence"] == "1.0"
        assert "polygon" not in fields
        assert "text" not in fields

    def test_form_fields_for_polygon(self):
        annotation = Annotation(label_id=5, polygon=[Point(0, 0), Point(10, 0), Point(5, 8)])
        fields = annotation.form_fields()
        assert json.loads(fields["polygon"]) == [
            {"x": 0, "y": 0},
            {"x": 10, "y": 0},
            {"x": 5, "y": 8},
        ]
        assert "bbox" not in fields

    def test_from_dict_accepts_json_encoded_geometry(self):
        annotation = Annotation.from_dict(
            {
                "id": 9,
                "label_id": "3",
                "bbox": json.dumps({"x": 1, "y": 2, "width": 3, "height": 4}),
                "confidence": "0.5",
            }
        )
        assert annotation.id == 9
        assert annotation.label_id == 3
        assert annotation.bbox == BBox(1, 2, 3, 4)
        assert annotation.confidence == 0.5
        assert annotation.geometry_kind is LabelFormat.BBOX

    def test_from_dict_defaults_confidence(self):
        annotation = Annotation.from_dict({"label_id": 1, "text": "AB-123"})
        assert annotation.confidence == 1.0
        assert annotation.geometry_kind is LabelFormat.TEXT

    @pytest.mark.parametrize(
        "annotation",
        [
            Annotation(label_id=1),
            Annotation(label_id=1, bbox=BBox(0, 0, 10, 10), text="x"),
            Annotation(label_id=1, bbox=BBox(0, 0, -1, 10)),
            Annotation(label_id=1, bbox=BBox(0, 0, 10, 10), confidence=1.5),
        ],
    )
    def test_validate_rejects_malformed(self, annotation):
        with pytest.raises(ValidationError):
            annotation.validate()

    def test_with_id_keeps_geometry(self):
        draft = Annotation(label_id=1, bbox=BBox(0, 0, 10, 10))
        persisted = draft.with_id(42)
        assert persisted.id == 42
        assert persisted.bbox == draft.bbox
        assert draft.id is None


def test_image_info_from_dict_defaults():
    info = ImageInfo.from_dict({"id": 7})
    assert info == ImageInfo(id="7", original_filename="image.jpg", width=640, height=640)


def test_editor_state_to_dict():
    state = EditorState(
        image=ImageInfo(id="7"),
        session_id="11",
        tool=Tool.BBOX,
        selected_label=Label(3, "car", "#FF0000"),
        scale=1.5,
    )
    assert state.to_dict() == {
        "image_id": "7",
        "session_id": "11",
        "tool": "bbox",
        "selected_label_id": 3,
        "scale": 1.5,
    }
