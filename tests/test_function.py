"""
Tests for the Functions Framework HTTP entry point
"""

from unittest.mock import patch

import flask
import pytest

from zoomrecpage import function
from zoomrecpage.exceptions import MISSING_ENV_MESSAGE
from zoomrecpage.handler import HttpResponse

from .page_test_utils import REQUIRED_ENV, meeting, recordings_response, token_response


@pytest.fixture
def app():
    return flask.Flask(__name__)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.setattr("zoomrecpage.config.user_config_dir", lambda app: str(tmp_path))
    for key in REQUIRED_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.mark.parametrize("method", ["GET", "POST", "HEAD"])
def test_any_method_renders(app, monkeypatch, method):
    monkeypatch.setattr(function, "handle_request", lambda: HttpResponse.html("<p>ok</p>"))

    with app.test_request_context("/anything?x=1", method=method):
        body, status, headers = function.recordings(flask.request)

    assert status == 200
    assert body == "<p>ok</p>"
    assert headers["Content-Type"] == "text/html; charset=utf-8"


def test_missing_env_vars(app):
    with patch("requests.post") as mock_post:
        with app.test_request_context("/"):
            body, status, headers = function.recordings(flask.request)

    assert status == 500
    assert body == MISSING_ENV_MESSAGE
    mock_post.assert_not_called()


def test_reads_process_environment(app, monkeypatch):
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)

    with patch("requests.post", return_value=token_response()), patch(
        "requests.get", return_value=recordings_response([meeting(222)])
    ):
        with app.test_request_context("/"):
            body, status, _ = function.recordings(flask.request)

    assert status == 200
    assert body.count('class="meeting"') == 1


def test_logging_uses_configured_level(monkeypatch):
    levels = []
    monkeypatch.setattr(function, "setup_logging", levels.append)

    function.configure_logging({"LOG_LEVEL": "debug"})

    assert levels == ["DEBUG"]
