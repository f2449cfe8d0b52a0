"""Image scanning CLI: ``dhi-scan-image <image> [output-file]``."""

from pathlib import Path
from typing import List, Optional

import typer

from dhi_workshop.config import get_settings, normalize_severity
from dhi_workshop.core.errors import (
    ImageRequiredError, ScannerNotInstalledError, WorkshopError,
)
from dhi_workshop.infrastructure.observability import setup_logging
from dhi_workshop.scanner.trivy import TrivyScanner

PROG = "dhi-scan-image"
RULE = "=" * 49

USAGE_EXAMPLES = [
    f"{PROG} node:20-bookworm",
    f"{PROG} demonstrationorg/dhi-node:22-alpine3.22",
    f"{PROG} dhi-workshop-app-dhi trivy-dhi-results.json",
]

INSTALL_HINTS = [
    "  macOS:   brew install aquasecurity/trivy/trivy",
    "  Linux:   wget -qO - https://aquasecurity.github.io/trivy-repo/deb/public.key | sudo apt-key add -",
    "           echo 'deb https://aquasecurity.github.io/trivy-repo/deb $(lsb_release -sc) main' | sudo tee -a /etc/apt/sources.list.d/trivy.list",
    "           sudo apt-get update && sudo apt-get install trivy",
    "  Docker:  docker run --rm -v /var/run/docker.sock:/var/run/docker.sock aquasec/trivy image <image>",
]

app = typer.Typer(
    help="Scan a container image for HIGH and CRITICAL vulnerabilities with Trivy.",
    add_completion=False,
)


def additional_options(image: str) -> List[tuple]:
    """Follow-up commands shown after a scan."""
    return [
        ("Save results to file (JSON):",
         f"trivy image --severity HIGH,CRITICAL --format json -o trivy-results.json {image}"),
        ("Save results to file (Table):",
         f"trivy image --severity HIGH,CRITICAL --format table -o trivy-results.txt {image}"),
        ("Include MEDIUM severity:",
         f"trivy image --severity MEDIUM,HIGH,CRITICAL {image}"),
        ("Generate SARIF output for GitHub Actions:",
         f"trivy image --format sarif -o trivy-results.sarif {image}"),
        ("Compare with Docker Scout (save to file):",
         "docker scout compare --to node:20-bookworm "
         "demonstrationorg/dhi-node:22-alpine3.22 --format markdown > scout-comparison.md"),
    ]


def _banner(text: str, fg: str = typer.colors.CYAN) -> None:
    typer.secho(RULE, fg=typer.colors.CYAN)
    typer.secho(f"    {text}", fg=fg)
    typer.secho(RULE, fg=typer.colors.CYAN)
    typer.echo("")


def _fail(exc: WorkshopError, lines: List[str]) -> None:
    typer.secho(f"Error: {exc.message}", fg=typer.colors.RED)
    typer.echo("")
    for line in lines:
        typer.echo(line)
    raise typer.Exit(code=1)


@app.command()
def scan(
    image: Optional[str] = typer.Argument(
        None, metavar="IMAGE", help="Image reference, e.g. node:20-bookworm",
    ),
    output_file: Optional[Path] = typer.Argument(
        None, metavar="[OUTPUT_FILE]", help="Save a JSON report to this path",
    ),
    severity: Optional[str] = typer.Option(
        None, "--severity", "-s", help="Comma-separated severities (default HIGH,CRITICAL)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Pull IMAGE and report its vulnerabilities."""
    settings = get_settings()
    setup_logging("DEBUG" if verbose else "WARNING", "text")

    if not image:
        _fail(ImageRequiredError(), [
            f"Usage: {PROG} <image-name> [output-file]",
            "",
            "Examples:",
            *(f"  {example}" for example in USAGE_EXAMPLES),
        ])

    scanner = TrivyScanner(
        trivy_bin=settings.trivy_bin,
        docker_bin=settings.docker_bin,
        severity=normalize_severity(severity) if severity else settings.scan_severity,
    )
    try:
        scanner.ensure_installed()
    except ScannerNotInstalledError as exc:
        _fail(exc, ["Install Trivy:", *INSTALL_HINTS])

    _banner(f"Scanning Image: {image}")

    typer.secho("Ensuring image is available locally...", fg=typer.colors.YELLOW)
    for line in scanner.pull_image(image):
        typer.echo(line)
    typer.echo("")

    typer.secho(
        f"Running Trivy scan ({scanner.severity} vulnerabilities)...",
        fg=typer.colors.YELLOW,
    )
    typer.echo("")
    if output_file is not None:
        typer.secho(f"Saving results to: {output_file}", fg=typer.colors.BLUE)
        typer.echo("")

    for result in scanner.scan_image(image, output_file):
        if not result.success:
            typer.secho(
                f"Trivy {result.format.value} scan failed (exit {result.exit_code})",
                fg=typer.colors.RED,
            )
            raise typer.Exit(code=result.exit_code)

    if output_file is not None:
        typer.echo("")
        typer.secho(f"Results saved to: {output_file}", fg=typer.colors.GREEN)

    typer.echo("")
    _banner("Scan complete!", fg=typer.colors.GREEN)

    typer.secho("Additional scan options:", fg=typer.colors.BLUE)
    typer.echo("")
    for title, command in additional_options(image):
        typer.secho(title, fg=typer.colors.GREEN)
        typer.echo(f"  {command}")
        typer.echo("")


def main() -> None:
    """Console entry point."""
    app()


if __name__ == "__main__":
    main()
