"""Scanner test fixtures — fake docker/trivy subprocesses.

Invariants:
    - No real subprocess is ever started
    - fake_tools["calls"] records every command line in order
    - trivy invocations with -o create the report file, like the real tool
"""

import subprocess

import pytest

from dhi_workshop.config import get_settings
from dhi_workshop.scanner import trivy


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_tools(monkeypatch):
    """Replace subprocess.run and shutil.which inside the trivy wrapper.

    Returns dict with:
      - calls: list of argv lists
      - exit_codes: dict[format, int] to make a trivy scan fail
      - pull_output: stdout of docker pull
      - installed: set to False to hide the trivy binary
    """
    state = {
        "calls": [],
        "exit_codes": {},
        "pull_output": (
            "20-bookworm: Pulling from library/node\n"
            "a1b2c3: Pull complete\n"
            "Digest: sha256:deadbeef\n"
            "Status: Downloaded newer image for node:20-bookworm\n"
        ),
        "installed": True,
    }

    def fake_run(cmd, **kwargs):
        state["calls"].append(list(cmd))
        if cmd[1] == "pull":
            return subprocess.CompletedProcess(cmd, 0, stdout=state["pull_output"])
        fmt = cmd[cmd.index("--format") + 1]
        if "-o" in cmd:
            with open(cmd[cmd.index("-o") + 1], "w") as f:
                f.write('{"Results": []}')
        return subprocess.CompletedProcess(cmd, state["exit_codes"].get(fmt, 0))

    def fake_which(name):
        return f"/usr/local/bin/{name}" if state["installed"] else None

    monkeypatch.setattr(trivy.subprocess, "run", fake_run)
    monkeypatch.setattr(trivy.shutil, "which", fake_which)
    return state
