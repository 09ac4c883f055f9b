"""
Tests for ProjectsClient and ModelsClient request shapes.
"""

import pytest

from sbxai_annotation.api import ModelsClient

REST = "/api/v1/yolo/rest"


@pytest.fixture
def image_files(tmp_path):
    paths = []
    for name in ("a.jpg", "b.png"):
        path = tmp_path / name
        path.write_bytes(b"\x89fake")
        paths.append(path)
    return paths


class TestProjects:
    def test_list_projects(self, projects, http):
        http.route("GET", f"{REST}/projects", {"projects": [{"id": 1, "name": "Streets"}]})
        assert projects.list_projects() == [{"id": 1, "name": "Streets"}]
        assert http.calls[0].kwargs["params"] == {"limit": 50}

    def test_missing_collection_key_is_empty(self, projects, http):
        http.route("GET", f"{REST}/projects", {})
        assert projects.list_projects() == []

    def test_create_and_delete_project(self, projects, http):
        http.route("POST", f"{REST}/projects", {"id": 5, "name": "New"})
        http.route("DELETE", f"{REST}/projects/5", None)

        assert projects.create_project("New")["id"] == 5
        assert http.calls[0].kwargs["json"] == {"name": "New"}
        assert projects.delete_project(5) is None

    def test_list_images_paginates(self, projects, http):
        http.route("GET", f"{REST}/projects/1/images", {"images": [{"id": 7}]})
        assert projects.list_images(1, limit=10, offset=20) == [{"id": 7}]
        assert http.calls[0].kwargs["params"] == {"limit": 10, "offset": 20}

    def test_upload_images(self, projects, http, image_files):
        http.route("POST", f"{REST}/projects/1/images", {"uploaded": 2})

        assert projects.upload_images(1, image_files) == {"uploaded": 2}

        call = http.calls[0]
        assert call.uploads() == [("files", "a.jpg"), ("files", "b.png")]
        handles = [part[1][1] for part in call.kwargs["files"]]
        assert all(handle.closed for handle in handles)

    def test_create_label(self, projects, http):
        http.route("POST", f"{REST}/projects/1/labels", {"id": 9})
        projects.create_label(1, "plate", expected_format="text", color="#00FF00")
        assert http.calls[0].kwargs["json"] == {
            "name": "plate",
            "description": "",
            "expected_format": "text",
            "color": "#00FF00",
        }

    def test_delete_label(self, projects, http):
        http.route("DELETE", f"{REST}/projects/1/labels/9", None)
        projects.delete_label(1, 9)
        assert http.calls[0].path == f"{REST}/projects/1/labels/9"

    def test_dashboard_stats(self, projects, http):
        http.route("GET", f"{REST}/dashboard/stats", {"projects": 2, "images": 10})
        assert projects.dashboard_stats() == {"projects": 2, "images": 10}


class TestModels:
    def test_list_models_is_public(self, client, http):
        http.route("GET", "/api/v1/yolo/models", {"models": [{"id": "yolov8n"}]})
        assert ModelsClient(client).list_models() == [{"id": "yolov8n"}]
        assert http.calls[0].headers == {}

    def test_predict_and_ocr(self, client, http, image_files):
        http.route("POST", "/api/v1/yolo/predict/yolov8n", {"detections": []})
        http.route("POST", "/api/v1/yolo/ocr/plates", {"text": "AB123"})
        models = ModelsClient(client)

        assert models.predict("yolov8n", image_files[0]) == {"detections": []}
        assert models.ocr("plates", image_files[1], confidence=0.5) == {"text": "AB123"}

        predict, ocr = http.calls
        assert predict.form() == {"confidence": "0.25"}
        assert predict.uploads() == [("file", "a.jpg")]
        assert ocr.form() == {"confidence": "0.5"}
