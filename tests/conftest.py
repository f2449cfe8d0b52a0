"""Root conftest — shared test configuration."""

import os

# Keep tests independent of the host's locale-demo environment
os.environ.pop("NODE_ICU_DATA", None)
os.environ.pop("ICU_DATA_PATH", None)
os.environ.setdefault("LOG_FORMAT", "text")
