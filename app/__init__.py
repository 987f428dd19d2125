"""
Backend server package.

* `app/server/` - HTTP application factory and entrypoint.
* `app/database.py` - Background MongoDB connector.
* `app/config.py` - Layered settings (arguments, environment, TOML, defaults).
* `app/observability/` - Structured logging, metrics and health checks.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
