"""
End-to-end editor workflows.

An in-memory server keeps session items, so a reopened editor sees what a
previous one saved.
"""

import json

import cv2
import pytest

from sbxai_annotation.core.annotation import AnnotationToolController, BBox, Tool
from sbxai_annotation.interfaces import CanvasAnnotationAdapter

pytestmark = pytest.mark.integration

REST = "/api/v1/yolo/rest"


@pytest.fixture
def server(project_routes, respond):
    """Session items persisted across editor instances."""
    items = []

    def add_item(call):
        form = call.form()
        item = dict(form, id=100 + len(items), bbox=json.loads(form["bbox"]))
        items.append(item)
        return respond(200, {"id": item["id"]})

    project_routes.route("POST", f"{REST}/sessions/11/items", add_item)
    project_routes.route(
        "GET", f"{REST}/sessions/11/items", lambda call: respond(200, {"items": items})
    )
    return items


class TestAnnotationWorkflow:
    def test_annotate_zoom_save_and_reopen(self, projects, cfg, server, tmp_path):
        controller = AnnotationToolController(projects, cfg=cfg)
        frames = []
        adapter = CanvasAnnotationAdapter(
            controller, update_image_callback=frames.append, canvas_origin=(50, 50)
        )

        assert controller.open(1, 7)
        controller.select_label(3)
        controller.select_tool(Tool.BBOX)

        # one box at 100%, one at 200%, one accidental click
        adapter.drag((150, 150), (350, 300))
        controller.zoom_in()
        controller.set_scale(2.0)
        adapter.drag((250, 250), (290, 290))
        adapter.drag((60, 60), (62, 62))

        assert [a.bbox for a in controller.annotations] == [
            BBox(100, 100, 200, 150),
            BBox(100, 100, 20, 20),
        ]
        assert len(server) == 2

        path = controller.last_render.save(tmp_path / "canvas.png")
        assert cv2.imread(str(path)).shape == (600, 800, 3)
        assert frames[-1].shape == (600, 800, 3)
        assert adapter.zoom_label() == "200%"

        controller.delete_annotation(1)
        assert len(controller.annotations) == 1
        controller.close()

        reopened = AnnotationToolController(projects, cfg=cfg)
        assert reopened.open(1, 7)
        # local deletes do not reach the server
        assert [a.id for a in reopened.annotations] == [100, 101]
        assert reopened.annotations[0].bbox == BBox(100, 100, 200, 150)
        reopened.close()
