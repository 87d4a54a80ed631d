"""Version comparison, release lookup and self-update."""

from __future__ import annotations

import json
import os
import re
import shutil
import subprocess
import sys
import urllib.error
import urllib.request

VERSION = "dev"
DEFAULT_BASE_URL = "https://api.turso.tech"
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _compare_strings(a: str, b: str) -> int:
    return (a > b) - (a < b)


def semver_compare(a: str, b: str) -> int:
    """Compare two x.y.z versions; fall back to string order when malformed."""
    a = a.removeprefix("v")
    b = b.removeprefix("v")
    parts_a = a.split(".")
    parts_b = b.split(".")
    if len(parts_a) != 3 or len(parts_b) != 3:
        return _compare_strings(a, b)
    for part_a, part_b in zip(parts_a, parts_b):
        if not (_INTEGER.fullmatch(part_a) and _INTEGER.fullmatch(part_b)):
            return _compare_strings(a, b)
        num_a, num_b = int(part_a), int(part_b)
        if num_a != num_b:
            return -1 if num_a < num_b else 1
    return 0


def is_under_homebrew() -> bool:
    """True when the running program lives in Homebrew's bin directory."""
    binary = os.path.abspath(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    if not binary:
        return False
    brew = shutil.which("brew")
    if brew is None:
        return False
    try:
        result = subprocess.run([brew, "--prefix"], capture_output=True, text=True, check=True)
    except (OSError, subprocess.CalledProcessError):
        return False
    prefix = os.path.join(result.stdout.strip(), "bin") + os.sep
    return binary.startswith(prefix)


def update_command() -> str:
    """The shell command that installs the latest release."""
    if is_under_homebrew():
        return "brew update && brew upgrade turso"
    return 'curl -sSfL "https://get.tur.so/install.sh" | sh'


def run_update() -> None:
    """Run the update command, raising RuntimeError if it fails."""
    try:
        subprocess.run(["sh", "-c", update_command()], check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise RuntimeError(f"failed to execute update command: {exc}") from exc


def fetch_latest_version(base_url: str | None = None) -> str:
    """Ask the API for the latest released version."""
    url = (base_url or DEFAULT_BASE_URL).rstrip("/") + "/releases/latest"
    request = urllib.request.Request(url, headers={"User-Agent": f"turso-cli/{VERSION}"})
    try:
        with urllib.request.urlopen(request) as response:
            status, reason = response.status, response.reason
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise RuntimeError(f"error getting latest release: {exc.code} {exc.reason}") from exc
    if status != 200:
        raise RuntimeError(f"error getting latest release: {status} {reason}")
    payload = json.loads(body)
    version = payload.get("latest", "") if isinstance(payload, dict) else ""
    if not version:
        raise RuntimeError("got empty version for latest release")
    return version