import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from tursoctl.update import fetch_latest_version, is_under_homebrew, semver_compare, update_command


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("v1.2.3", "1.2.3", 0),
        ("1.2.3", "1.10.0", -1),
        ("2.0.0", "v1.9.9", 1),
        ("1.2", "1.2", 0),
        ("abc", "abd", -1),
        ("1.x.0", "1.2.0", 1),
    ],
)
def test_semver_compare(a, b, expected):
    assert semver_compare(a, b) == expected


def test_semver_compare_is_antisymmetric():
    pairs = [("0.9.1", "0.10.0"), ("v3.1.4", "3.1.5"), ("dev", "1.0.0")]
    for a, b in pairs:
        assert semver_compare(a, b) == -semver_compare(b, a)


def test_not_under_homebrew_without_brew(monkeypatch, tmp_path):
    monkeypatch.setenv("PATH", str(tmp_path))
    assert is_under_homebrew() is False
    assert "install.sh" in update_command()


class _Handler(BaseHTTPRequestHandler):
    status = 200
    body = b"{}"

    def do_GET(self):
        if self.path != "/releases/latest":
            self.send_response(404)
            self.end_headers()
            return
        self.send_response(type(self).status)
        self.end_headers()
        self.wfile.write(type(self).body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()


def _base(server):
    return f"http://127.0.0.1:{server.server_address[1]}"


def test_fetch_latest_version(server):
    _Handler.status = 200
    _Handler.body = json.dumps({"latest": "v1.0.0"}).encode()
    assert fetch_latest_version(_base(server)) == "v1.0.0"


def test_fetch_latest_version_empty(server):
    _Handler.status = 200
    _Handler.body = json.dumps({"latest": ""}).encode()
    with pytest.raises(RuntimeError, match="got empty version for latest release"):
        fetch_latest_version(_base(server))


def test_fetch_latest_version_bad_status(server):
    _Handler.status = 500
    _Handler.body = b""
    with pytest.raises(RuntimeError, match="error getting latest release"):
        fetch_latest_version(_base(server))


def test_fetch_latest_version_bad_json(server):
    _Handler.status = 200
    _Handler.body = b"not json"
    with pytest.raises(ValueError):
        fetch_latest_version(_base(server))