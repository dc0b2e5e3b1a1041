"""ASGI entrypoint for the pet tracker API."""

from pet_tracker.api.app import create_app
from pet_tracker.containers import build_container

app = create_app(build_container())
