"""Storefront FastAPI application.

Serves the JSON API under ``/api`` and uploaded images under ``/uploads``.
Commands are processed synchronously inside a Protean domain context that
is pushed for every request.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from storefront.api.application import create_app
from storefront.domain import init_storefront
from storefront.utils.logging import install_excepthook

# Initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml.
storefront = init_storefront()
install_excepthook()

app = create_app(storefront)
