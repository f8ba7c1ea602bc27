"""ASGI entrypoint for the macros tracker API."""

from macros_tracker.api.app import create_app
from macros_tracker.containers import build_container

app = create_app(build_container())
