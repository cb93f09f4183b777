"""FinMind bookkeeping API application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from . import cli as _cli
from .blueprints.converters import RecordIdConverter
from .config import BaseConfig, DevConfig, TestingConfig
from .errors import FinmindError
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestingConfig,
    "default": BaseConfig,
}

logger = get_logger("app")


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths mounted under the API prefix."""

    yield "finmind.blueprints.auth"
    yield "finmind.blueprints.user"
    yield "finmind.blueprints.categories"
    yield "finmind.blueprints.bills"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["FINMIND_CONFIG"] = config_obj
    app.json.sort_keys = False  # type: ignore[attr-defined]

    setup_logging(config_obj)

    from .extensions import init_app

    init_app(app, config_obj)
    app.url_map.converters["id"] = RecordIdConverter
    _register_blueprints(app, config_obj)
    _register_error_handlers(app)
    _register_request_logging(app)
    _cli.init_app(app)

    logger.info("Application created", extra={"api_prefix": config_obj.API_PREFIX})
    return app


def _register_blueprints(app: Flask, config: BaseConfig) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint, url_prefix=f"{config.API_PREFIX}{blueprint.url_prefix}")

    from .blueprints.health import bp as health_bp

    app.register_blueprint(health_bp)


def _register_error_handlers(app: Flask) -> None:
    """Render every failure as a single JSON error object."""

    @app.errorhandler(FinmindError)
    def _handle_finmind_error(error: FinmindError):
        if error.status_code >= 500:
            logger.error("Request failed: %s", error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        return jsonify({"error": error.description or error.name}), error.code or 500

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500


def _register_request_logging(app: Flask) -> None:
    @app.after_request
    def _log_request(response):
        identity = g.get("identity")
        logger.info(
            "%s %s -> %s",
            request.method,
            request.path,
            response.status_code,
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "user_id": identity.user_id if identity else None,
            },
        )
        return response


__all__ = ["BaseConfig", "DevConfig", "TestingConfig", "create_app"]
