from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator

import httpx
import pytest

from mfwsclient import ClientConfig, HttpxTransport, MFWSClient

BASE_URL = "https://vault.example.com"

Handler = Callable[[httpx.Request], Any]


@pytest.fixture(autouse=True)
def clear_mfws_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove MFWS_* vars (and bare field names) to prevent cross-test leakage.

    Yields:
        Iterator[None]: Context manager semantics for pytest.
    """
    field_names = {"BASE_URL", "TIMEOUT", "VERIFY", "USER_AGENT"}
    to_clear = [
        k
        for k in os.environ.keys()
        if k.upper().startswith("MFWS_") or k.upper() in field_names
    ]
    for k in to_clear:
        monkeypatch.delenv(k, raising=False)
    yield


@dataclass
class FakeService:
    """Routes requests by (method, path) and records every request it sees."""

    routes: dict[tuple[str, str], Handler] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def route(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def json(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        self.route(method, path, lambda _: httpx.Response(status_code, json=payload))

    def calls(self, method: str | None = None, path: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if (method is None or r.method == method)
            and (path is None or r.url.path == path)
        ]

    def __call__(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, text=f"no route for {request.url.path}")
        return handler(request)


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


@pytest.fixture()
def service() -> FakeService:
    return FakeService()


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL)


@pytest.fixture()
def transport(config: ClientConfig, service: FakeService) -> HttpxTransport:
    return HttpxTransport(config, transport=httpx.MockTransport(service))


@pytest.fixture()
def client(config: ClientConfig, transport: HttpxTransport) -> MFWSClient:
    return MFWSClient(config=config, transport=transport)


@pytest.fixture()
def local_files(tmp_path: Path) -> list[Path]:
    """Three small files with distinct names, sizes and extensions."""
    specs = [("report.pdf", b"%PDF-1.4 fake"), ("notes.txt", b"hello"), ("README", b"x" * 42)]
    paths = []
    for name, content in specs:
        p = tmp_path / name
        p.write_bytes(content)
        paths.append(p)
    return paths


def upload_records(count: int, start: int = 100) -> list[dict[str, Any]]:
    """Partial records as the upload endpoint returns them."""
    return [
        {"UploadID": start + i, "Title": "", "Extension": "", "Size": 0, "TempFilePath": f"tmp{i}"}
        for i in range(count)
    ]


def object_version_record(type_: int = 0, id_: int = 12, version: int = 3) -> dict[str, Any]:
    return {
        "ObjVer": {"Type": type_, "ID": id_, "Version": version},
        "Title": "Quarterly report",
        "Files": [{"ID": 1, "Name": "report", "Extension": "pdf", "Version": 1}],
        "Deleted": False,
    }
