"""Shared fixtures: clean environment, configuration, fakes, local HTTP server."""

import json
import os
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from autopublish.config import ActionInputs, Configuration, ToolSettings
from autopublish.errors import ProcessError
from autopublish.models.process import CommandOutcome
from autopublish.models.publication import HttpResponse, PublicationRequest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Drop runner inputs and overrides leaking in from the outer environment."""
    for key in list(os.environ):
        upper = key.upper()
        if upper.startswith(("INPUT_", "AUTOPUBLISH_")) or upper == "GITHUB_EVENT_NAME":
            monkeypatch.delenv(key, raising=False)
    # ToolSettings reads .env from the cwd
    monkeypatch.chdir(tmp_path)


def make_config(event: str = "push", **inputs) -> Configuration:
    return Configuration(
        inputs=ActionInputs(GITHUB_EVENT_NAME=event, **inputs),
        tools=ToolSettings(),
    )


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "spec.html"
    path.write_text("<!DOCTYPE html><title>Spec</title>", encoding="utf-8")
    return path


@dataclass
class RecordingRunner:
    """ProcessRunner stand-in that records calls and exits with `exit_code`."""
    exit_code: int = 0
    cwd: Optional[Path] = None
    calls: List[List[str]] = field(default_factory=list)

    def run(self, command, args=(), cwd=None, env=None) -> CommandOutcome:
        self.calls.append([command, *args])
        if self.exit_code != 0:
            raise ProcessError(command, exit_code=self.exit_code)
        return CommandOutcome(command=command, args=list(args), exit_code=0)


@dataclass
class RecordingHttpClient:
    """HttpClient stand-in that records publication requests."""
    response: HttpResponse = field(
        default_factory=lambda: HttpResponse(
            status_code=200, content_type="application/json", body={"status": "ok"}
        )
    )
    error: Optional[Exception] = None
    sent: List[PublicationRequest] = field(default_factory=list)

    def send(self, publication: PublicationRequest) -> HttpResponse:
        self.sent.append(publication)
        if self.error is not None:
            raise self.error
        return self.response


@dataclass
class ReceivedRequest:
    method: str
    path: str
    headers: Dict[str, str]
    body: str


class EchidnaHandler(BaseHTTPRequestHandler):
    """Fake publication service; the path picks the canned response."""

    received: List[ReceivedRequest] = []

    responses = {
        "/json": (200, "application/json", json.dumps({"id": "abc", "status": "queued"})),
        "/json-charset": (200, "application/json; charset=utf-8", json.dumps({"id": "abc"})),
        "/text": (200, "text/plain", "Request received"),
        "/text-utf8": (200, "text/plain", "Requête reçue"),
        "/bad-json": (200, "application/json", "<html>oops</html>"),
        "/error": (500, "text/plain", "Internal error"),
    }

    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode("utf-8") if length else ""
        self.received.append(
            ReceivedRequest(self.command, self.path, dict(self.headers.items()), body)
        )
        status, content_type, payload = self.responses.get(self.path, (404, "text/plain", "not found"))
        data = payload.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    do_GET = _handle
    do_POST = _handle

    def log_message(self, format, *args):
        return


@pytest.fixture
def echidna_server():
    EchidnaHandler.received = []
    server = ThreadingHTTPServer(("127.0.0.1", 0), EchidnaHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}", EchidnaHandler.received
    finally:
        server.shutdown()
        server.server_close()
