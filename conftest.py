"""Root conftest: keep the app on the in-memory store for tests."""

import os

os.environ.setdefault("STORE_BACKEND", "memory")
