"""Top-level ASGI entrypoint: ``uvicorn vicat_server:app``."""

from vicat_keys.api_factory import create_app

app = create_app()

__all__ = ["app", "create_app"]
