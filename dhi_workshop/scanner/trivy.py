"""
Trivy image scanner wrapper.

Trivy is run as a subprocess against a container image, after making sure
the image is available locally through ``docker pull``. Scans are strictly
sequential and rely on Trivy's own exit status; there are no retries or
timeouts here.

Docs: https://aquasecurity.github.io/trivy/
"""

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from dhi_workshop.core.errors import ScannerNotInstalledError

logger = logging.getLogger(__name__)

# docker pull lines worth echoing back to the operator
_PULL_PROGRESS = re.compile(r"(Digest|Status|Image is up to date)")


class ScanFormat(str, Enum):
    """Trivy report formats used by the workshop."""
    JSON = "json"
    TABLE = "table"


@dataclass
class ScanResult:
    """Outcome of a single trivy invocation."""
    image: str
    format: ScanFormat
    exit_code: int
    output_file: Optional[Path] = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class TrivyScanner:
    """
    Runs ``trivy image`` for one container image.

    Table reports go straight to the terminal; JSON reports are
    written to a file with ``-o``.
    """

    def __init__(
        self,
        trivy_bin: str = "trivy",
        docker_bin: str = "docker",
        severity: str = "HIGH,CRITICAL",
    ):
        """
        Args:
            trivy_bin: Trivy executable name or path
            docker_bin: Docker executable name or path
            severity: Comma-separated severities passed to ``--severity``
        """
        self.trivy_bin = trivy_bin
        self.docker_bin = docker_bin
        self.severity = severity

    def is_installed(self) -> bool:
        """True if the trivy binary can be found on PATH."""
        return shutil.which(self.trivy_bin) is not None

    def ensure_installed(self) -> None:
        """Raise ScannerNotInstalledError when trivy is missing."""
        if not self.is_installed():
            raise ScannerNotInstalledError(self.trivy_bin)

    def pull_image(self, image: str) -> List[str]:
        """
        Make sure the image is available locally.

        Pull failures are not fatal: the image may exist only locally (a
        freshly built workshop image), in which case trivy still finds it.

        Returns:
            The progress lines of ``docker pull`` worth showing
        """
        logger.info(f"Pulling image {image}", extra={"image": image})
        try:
            result = subprocess.run(
                [self.docker_bin, "pull", image],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            logger.warning(f"docker pull could not be started: {e}")
            return []

        if result.returncode != 0:
            logger.warning(
                f"docker pull exited with {result.returncode}; continuing",
                extra={"image": image, "exit_code": result.returncode},
            )
        return [
            line for line in (result.stdout or "").splitlines()
            if _PULL_PROGRESS.search(line)
        ]

    def build_scan_command(
        self,
        image: str,
        fmt: ScanFormat,
        output_file: Optional[Path] = None,
    ) -> List[str]:
        """
        Build the trivy command line.

        Args:
            image: Image reference to scan
            fmt: Report format
            output_file: Where trivy writes the report (terminal if None)

        Returns:
            List of command arguments
        """
        cmd = [
            self.trivy_bin,
            "image",
            "--severity", self.severity,
            "--no-progress",
            "--format", fmt.value,
        ]
        if output_file is not None:
            cmd += ["-o", str(output_file)]
        cmd.append(image)
        return cmd

    def scan(
        self,
        image: str,
        fmt: ScanFormat = ScanFormat.TABLE,
        output_file: Optional[Path] = None,
    ) -> ScanResult:
        """Run one trivy scan, streaming its output to the terminal."""
        cmd = self.build_scan_command(image, fmt, output_file)
        logger.debug(f"Trivy command: {' '.join(cmd)}")

        result = subprocess.run(cmd)

        logger.info(
            f"trivy ({fmt.value}) completed with exit code {result.returncode}",
            extra={"image": image, "exit_code": result.returncode},
        )
        return ScanResult(
            image=image,
            format=fmt,
            exit_code=result.returncode,
            output_file=output_file,
        )

    def scan_image(
        self, image: str, output_file: Optional[Path] = None,
    ) -> List[ScanResult]:
        """
        Scan an image the way the workshop script does.

        With an output file, a JSON report is saved first and a table is then
        shown on the terminal. Without one, only the table is shown. Stops at
        the first scan that fails.
        """
        plan = [(ScanFormat.TABLE, None)]
        if output_file is not None:
            plan.insert(0, (ScanFormat.JSON, output_file))

        results = []
        for fmt, target in plan:
            result = self.scan(image, fmt, target)
            results.append(result)
            if not result.success:
                break
        return results
