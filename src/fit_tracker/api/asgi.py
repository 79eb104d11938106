"""ASGI entrypoint for the fit tracker API."""

from fit_tracker.api.app import create_app
from fit_tracker.containers import build_container

app = create_app(build_container())
