"""
Tests for subcommand discovery and a few subcommands run end to end against
the in-memory HTTP session.
"""

import argparse

import pytest
import requests

from sbxai_annotation.cli import build_parser
from sbxai_annotation.cli.context import build_context

REST = "/api/v1/yolo/rest"


@pytest.fixture
def parser():
    return build_parser()


@pytest.fixture
def cli_env(monkeypatch, tmp_path, http):
    """Point the CLI at a temporary credential file and the fake session."""
    monkeypatch.setenv("SBXAI_AUTH__CREDENTIALS_PATH", str(tmp_path / "credentials.json"))
    monkeypatch.setenv("SBXAI_API__BASE_URL", "http://api.test")
    monkeypatch.setattr(requests, "Session", lambda: http)
    return tmp_path


def run(parser, argv):
    args = parser.parse_args(argv)
    args.fn(args)


def test_all_subcommands_are_discovered(parser):
    subparsers = next(
        a for a in parser._actions if isinstance(a, argparse._SubParsersAction)
    )
    assert set(subparsers.choices) == {
        "annotate",
        "api_docs",
        "jobs",
        "labels",
        "login",
        "logout",
        "projects",
        "render",
        "whoami",
    }


def test_annotate_arguments(parser):
    args = parser.parse_args(
        ["annotate", "1", "7", "-l", "3", "-b", "100", "100", "300", "250", "-s", "2"]
    )
    assert args.boxes == [[100.0, 100.0, 300.0, 250.0]]
    assert args.label == 3
    assert args.scale == 2.0


def test_base_url_flag_overrides_environment(tmp_path):
    args = argparse.Namespace(base_url="http://other.test")
    ctx = build_context(
        args, env={"SBXAI_AUTH__CREDENTIALS_PATH": str(tmp_path / "c.json")}
    )
    assert ctx.client.base_url == "http://other.test"
    assert not ctx.client.auth.is_authenticated


def test_login_whoami_logout(parser, cli_env, http, capsys):
    http.route("POST", f"{REST}/users/login", {"access_token": "tok"})
    http.route("GET", f"{REST}/users/me", {"user_id": 1, "email": "ann@example.com"})

    run(parser, ["login", "ann@example.com", "-p", "secret"])
    assert (cli_env / "credentials.json").exists()

    run(parser, ["whoami", "--cached"])
    run(parser, ["logout"])
    run(parser, ["whoami"])

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Logged in as ann@example.com",
        "ann@example.com (1)",
        "Logged out",
        "Not logged in",
    ]


def test_annotate_saves_boxes_and_canvas(parser, cli_env, project_routes, capsys):
    output = cli_env / "canvas.png"

    run(
        parser,
        ["annotate", "1", "7", "-l", "3", "-b", "100", "100", "300", "250", "-o", str(output)],
    )

    (call,) = project_routes.find("POST", f"{REST}/sessions/11/items")
    assert call.form()["label_id"] == "3"
    assert output.exists()
    out = capsys.readouterr().out
    assert "0\tcar\t100,100 200x150\t1.00" in out


def test_render_writes_one_file_per_image(parser, cli_env, project_routes, capsys):
    run(parser, ["render", "1", str(cli_env / "out")])
    assert (cli_env / "out" / "7.png").exists()
    assert "Rendered 1 of 1" in capsys.readouterr().out


def test_jobs_list(parser, cli_env, http, capsys):
    http.route("GET", "/api/v1/jobs", [{"id": 4, "workflow_id": 1, "status": "failed"}])
    run(parser, ["jobs", "--status", "failed"])
    assert http.calls[0].kwargs["params"] == {"status": "failed", "limit": 20}
    assert capsys.readouterr().out.startswith("4\t1\tfailed")


def test_api_docs(parser, cli_env, http, capsys):
    http.route(
        "GET",
        "/openapi.json",
        {"info": {"title": "SBX AI", "version": "1"}, "paths": {"/health": {"get": {}}}},
    )
    run(parser, ["api_docs"])
    assert "GET     /health" in capsys.readouterr().out
