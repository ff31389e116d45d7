from __future__ import annotations

import json
import os
from typing import Any
from unittest.mock import Mock

import pytest
import requests

from crmpclient.config import reset_configuration


def _make_response(status_code: int, body: Any) -> requests.Response:
    """Build a real `requests.Response` with the given status and body.

    `body` may be a str (sent verbatim) or any JSON-serialisable value.
    """
    res = requests.Response()
    res.status_code = status_code
    text = body if isinstance(body, str) else json.dumps(body)
    res._content = text.encode("utf-8")
    res.encoding = "utf-8"
    return res


@pytest.fixture(autouse=True)
def fresh_configuration():
    """Isolate the process-wide configuration between tests."""
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def clean_env(monkeypatch):
    """Clean environment fixture to isolate tests."""
    env_keys = ["CRMP_BASE_URI", "CRMP_API_TOKEN", "CUSTOM_URI", "CUSTOM_TOKEN"]

    for key in env_keys:
        monkeypatch.delenv(key, raising=False)

    yield

    # .env loading writes straight to os.environ; monkeypatch restores the originals.
    for key in env_keys:
        os.environ.pop(key, None)


@pytest.fixture
def session():
    """A stand-in HTTP session; set `session.post.side_effect` to a list of responses."""
    return Mock(spec=requests.Session)


@pytest.fixture
def sample_areas():
    return [
        {"identifier": "E14000639", "name": "Cities of London and Westminster"},
        {"identifier": "E14000540", "name": "Battersea"},
        {"identifier": "E14000768", "name": "Holborn and St Pancras"},
    ]


@pytest.fixture
def sample_membership():
    return {
        "identifier": "a1b2c3d4e5",
        "name": "Jo Bloggs",
        "areas": [{"identifier": "E14000639", "area_classification": "Constituency"}],
    }


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def page():
    """Factory for a 200 response holding one page of results."""

    def _page(results: list[dict[str, Any]], next_page: int | None = None) -> requests.Response:
        return _make_response(200, {"results": results, "next_page": next_page})

    return _page


@pytest.fixture
def sent_params():
    """Return the decoded JSON body of every POST made through a mock session."""

    def _sent_params(session: Mock) -> list[dict[str, Any]]:
        return [json.loads(call.kwargs["data"]) for call in session.post.call_args_list]

    return _sent_params
