"""Shared pytest fixtures for Graphite CI tests."""

import json
import logging
from typing import Any, Callable, Dict
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from graphite_ci.github.context import load_run_context
from graphite_ci.github.core import ActionsCore
from graphite_ci.models.decision import Caller


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "integration: tests that drive the full entry point")


@pytest.fixture(autouse=True)
def reset_graphite_logger():
    """Undo handlers installed by configure_logging."""
    yield
    root = logging.getLogger("graphite_ci")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def pull_request_event():
    """Webhook payload of a pull_request event."""
    return {
        "action": "synchronize",
        "number": 42,
        "pull_request": {"number": 42, "head": {"ref": "feature/skip-ci"}},
        "repository": {"name": "monorepo", "owner": {"login": "withgraphite"}},
    }


@pytest.fixture
def event_file(tmp_path, pull_request_event):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(pull_request_event), encoding="utf-8")
    return path


@pytest.fixture
def output_file(tmp_path):
    path = tmp_path / "github_output"
    path.write_text("", encoding="utf-8")
    return path


@pytest.fixture
def github_env(event_file, output_file) -> Dict[str, str]:
    """Environment of a pull_request run with action inputs set."""
    return {
        "GITHUB_REPOSITORY": "withgraphite/monorepo",
        "GITHUB_SHA": "0f1e2d3c4b5a69788796a5b4c3d2e1f00f1e2d3c",
        "GITHUB_REF": "refs/pull/42/merge",
        "GITHUB_HEAD_REF": "feature/skip-ci",
        "GITHUB_WORKFLOW": "CI",
        "GITHUB_JOB": "test",
        "GITHUB_RUN_ID": "9876543210",
        "GITHUB_EVENT_NAME": "pull_request",
        "GITHUB_EVENT_PATH": str(event_file),
        "GITHUB_OUTPUT": str(output_file),
        "INPUT_GRAPHITE_TOKEN": "gt-secret",
        "INPUT_GITHUB_TOKEN": "ghs-secret",
        "INPUT_ENDPOINT": "https://graphite.test",
        "INPUT_TIMEOUT": "5",
    }


@pytest.fixture
def run_context(github_env):
    return load_run_context(github_env)


@pytest.fixture
def caller():
    return Caller(name="graphite-ci", version="1.0.0")


@pytest.fixture
def core(github_env):
    return ActionsCore(github_env)


@pytest.fixture
def mock_canceller():
    """Run canceller that records calls."""
    canceller = Mock()
    canceller.cancel_workflow_run = AsyncMock(return_value=None)
    return canceller


@pytest.fixture
def make_http_client() -> Callable[[Callable[[httpx.Request], Any]], httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by ``handler``."""
    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return factory


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def respond(recorded_requests):
    """Handler factory returning a fixed status/body and recording requests."""
    def factory(status_code: int, body: Any = None, text: str = None):
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            if body is not None:
                return httpx.Response(status_code, json=body)
            return httpx.Response(status_code)
        return handler
    return factory


def read_outputs(path) -> Dict[str, str]:
    """Parse a GITHUB_OUTPUT file written with heredoc delimiters."""
    outputs: Dict[str, str] = {}
    lines = path.read_text(encoding="utf-8").splitlines()
    i = 0
    while i < len(lines):
        name, _, delimiter = lines[i].partition("<<")
        value_lines = []
        i += 1
        while lines[i] != delimiter:
            value_lines.append(lines[i])
            i += 1
        outputs[name] = "\n".join(value_lines)
        i += 1
    return outputs


@pytest.fixture
def outputs(output_file):
    """Callable returning the outputs written so far."""
    return lambda: read_outputs(output_file)
