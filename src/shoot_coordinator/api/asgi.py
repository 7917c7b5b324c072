"""ASGI entrypoint for the shoot coordinator API."""

from shoot_coordinator.api.app import create_app
from shoot_coordinator.containers import build_container

app = create_app(build_container())
