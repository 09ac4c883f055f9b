"""
Test fixtures and utilities for sbxai_annotation tests.

Provides an in-memory HTTP session, API clients wired to it, and a
controller mounted on a small project.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict

import pytest
import requests

from sbxai_annotation.api import ApiClient, AuthSession, ProjectsClient
from sbxai_annotation.config import default_config

BASE_URL = "http://api.test"
REST = "/api/v1/yolo/rest"


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end editor workflows")


def make_response(status: int = 200, payload: Any = None, text: str = None):
    """Build a real ``requests.Response`` carrying ``payload`` as JSON."""
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    if text is not None:
        response._content = text.encode()
    elif payload is not None:
        response._content = json.dumps(payload).encode()
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    return response


@dataclass
class Call:
    method: str
    url: str
    kwargs: Dict[str, Any]

    @property
    def path(self) -> str:
        return self.url[len(BASE_URL):]

    @property
    def headers(self) -> Dict[str, str]:
        return self.kwargs.get("headers") or {}

    def form(self) -> Dict[str, str]:
        """Plain multipart fields of the call (parts without a filename)."""
        return {
            key: value[1]
            for key, value in self.kwargs.get("files") or []
            if value[0] is None
        }

    def uploads(self):
        """(field, filename) of every file part of the call."""
        return [
            (key, value[0])
            for key, value in self.kwargs.get("files") or []
            if value[0] is not None
        ]


class FakeHttp:
    """
    Stand-in for ``requests.Session`` answering from a route table.

    A route maps ``(method, path)`` to a ``requests.Response``, an exception
    to raise, or a callable receiving the :class:`Call` and returning either.
    Unrouted requests answer 404.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.closed = False

    def route(self, method: str, path: str, payload=None, status: int = 200):
        if callable(payload) or isinstance(payload, Exception):
            self.routes[(method, path)] = payload
        else:
            self.routes[(method, path)] = make_response(status, payload)

    def request(self, method, url, **kwargs):
        call = Call(method, url, kwargs)
        self.calls.append(call)
        answer = self.routes.get((method, call.path))
        if answer is None:
            return make_response(404, {"detail": "Not Found"})
        if callable(answer) and not isinstance(answer, requests.Response):
            answer = answer(call)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def find(self, method: str, path: str):
        return [c for c in self.calls if c.method == method and c.path == path]

    def close(self):
        self.closed = True


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def auth_session():
    return AuthSession(access_token="tok-123", user={"email": "ann@example.com"})


@pytest.fixture
def client(http, auth_session):
    return ApiClient(BASE_URL, auth=auth_session, http=http)


@pytest.fixture
def projects(client):
    return ProjectsClient(client)


@pytest.fixture
def cfg():
    return default_config()


@pytest.fixture
def car_label_payload():
    return {"id": 3, "name": "car", "color": "#FF0000", "expected_format": "bbox"}


@pytest.fixture
def project_routes(http, car_label_payload):
    """Project 1 with one 400x300 image (id 7) and the "car" label (id 3)."""
    http.route("GET", f"{REST}/projects/1/labels", {"labels": [car_label_payload]})
    http.route(
        "GET",
        f"{REST}/projects/1/images",
        {
            "images": [
                {
                    "id": 7,
                    "original_filename": "street.jpg",
                    "image_width": 400,
                    "image_height": 300,
                }
            ]
        },
    )
    http.route("POST", f"{REST}/images/7/sessions", {"session_id": 11})
    http.route("GET", f"{REST}/sessions/11/items", {"items": []})
    http.route("POST", f"{REST}/sessions/11/items", {"id": 42})
    return http


@pytest.fixture
def controller(projects, cfg, project_routes):
    from sbxai_annotation.core.annotation import AnnotationToolController

    controller = AnnotationToolController(projects, cfg=cfg)
    yield controller
    if not controller.closed:
        controller.close()


@pytest.fixture
def opened_controller(controller):
    """Controller mounted on image 7 with the car label and bbox tool selected."""
    from sbxai_annotation.core.annotation import Tool

    assert controller.open(1, 7)
    assert controller.select_label(3)
    controller.select_tool(Tool.BBOX)
    return controller


@pytest.fixture
def respond():
    """Factory for ``requests.Response`` objects, see :func:`make_response`."""
    return make_response
