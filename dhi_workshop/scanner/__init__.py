"""
Container image scanning.

Wraps the Trivy CLI:
- trivy: subprocess wrapper (pull, scan, report formats)
- cli: ``dhi-scan-image`` command
"""

__all__ = ()
