"""Scan CLI — verifies dhi-scan-image argument handling and exit statuses.

Invariants:
    - Zero arguments → exit 1 with a usage message
    - Missing trivy → exit 1 with install instructions
    - Output file argument → report file exists after completion
    - Trivy failures propagate their exit status
"""

from typer.testing import CliRunner

from dhi_workshop.scanner.cli import app

runner = CliRunner()


def test_no_arguments_prints_usage_and_fails(fake_tools):
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "No image name provided" in result.output
    assert "Usage:" in result.output
    assert fake_tools["calls"] == []


def test_no_arguments_checked_before_scanner_presence(fake_tools):
    fake_tools["installed"] = False
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "Usage:" in result.output


def test_missing_trivy_prints_install_hints(fake_tools):
    fake_tools["installed"] = False
    result = runner.invoke(app, ["node:20-bookworm"])
    assert result.exit_code == 1
    assert "trivy is not installed" in result.output
    assert "brew install aquasecurity/trivy/trivy" in result.output
    assert fake_tools["calls"] == []


def test_scan_without_output_file(fake_tools):
    result = runner.invoke(app, ["node:20-bookworm"])
    assert result.exit_code == 0, result.output
    assert "Scanning Image: node:20-bookworm" in result.output
    assert "Digest: sha256:deadbeef" in result.output
    assert "Pull complete" not in result.output
    assert "Scan complete!" in result.output

    pull, table = fake_tools["calls"]
    assert pull[:2] == ["docker", "pull"]
    assert table[table.index("--format") + 1] == "table"
    assert "-o" not in table


def test_scan_with_output_file_creates_report(fake_tools, tmp_path):
    out = tmp_path / "trivy-results.json"
    result = runner.invoke(app, ["dhi-workshop-app-dhi", str(out)])

    assert result.exit_code == 0, result.output
    assert out.exists()
    assert f"Results saved to: {out}" in result.output
    formats = [c[c.index("--format") + 1] for c in fake_tools["calls"][1:]]
    assert formats == ["json", "table"]


def test_trivy_failure_propagates_exit_code(fake_tools):
    fake_tools["exit_codes"]["table"] = 3
    result = runner.invoke(app, ["node:20-bookworm"])
    assert result.exit_code == 3
    assert "Scan complete!" not in result.output


def test_severity_option(fake_tools):
    result = runner.invoke(app, ["--severity", "MEDIUM,HIGH,CRITICAL", "node:20-bookworm"])
    assert result.exit_code == 0, result.output
    table = fake_tools["calls"][-1]
    assert table[table.index("--severity") + 1] == "MEDIUM,HIGH,CRITICAL"


def test_additional_options_mention_image(fake_tools):
    result = runner.invoke(app, ["node:20-bookworm"])
    assert "trivy image --format sarif -o trivy-results.sarif node:20-bookworm" in result.output
    assert "docker scout compare" in result.output


def test_severity_option_is_normalized(fake_tools):
    result = runner.invoke(app, ["--severity", "medium, high", "node:20-bookworm"])
    assert result.exit_code == 0, result.output
    table = fake_tools["calls"][-1]
    assert table[table.index("--severity") + 1] == "MEDIUM,HIGH"
