"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from pixiu.core.config import BaseConfig, get_config
from pixiu.core.logger import configure_logging, init_app as init_logging
from pixiu.services.user.port import UserService


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    user_service: UserService | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object or import path; defaults to the ``APP_ENV`` class.
    :param user_service: Service the user routes delegate to. The
        SQLAlchemy-backed default is used when omitted.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from pixiu.core import proxy

    proxy.init_app(app)

    from pixiu.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from pixiu.core import cors

    cors.init_app(app)

    from pixiu.api import init_app as init_api

    init_api(app, user_service=user_service)

    from pixiu.core import errors

    errors.init_app(app)

    from pixiu import cli as app_cli

    app_cli.init_app(app)

    return app
