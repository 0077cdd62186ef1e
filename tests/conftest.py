"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally use a real API key or upstream
os.environ.setdefault("API_KEY", "test-fake-key")
os.environ.setdefault("UPSTREAM_BASE_URL", "https://upstream.invalid")
os.environ.setdefault("LOG_FORMAT", "text")
