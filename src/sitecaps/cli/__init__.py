"""CLI for sitecaps."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from sitecaps.cli.commands import products as _products_module  # noqa: F401
from sitecaps.cli.commands import status as _status_module  # noqa: F401
from sitecaps.cli.main import app


__all__ = ["app"]
