"""ASGI entrypoint for the meal snap API."""

from meal_snap.api.app import create_app
from meal_snap.containers import build_container

app = create_app(build_container())
