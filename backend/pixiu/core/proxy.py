"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI pipeline in :class:`ProxyFix` when ``USE_PROXYFIX`` is set.

    The hop count comes from ``PROXYFIX_HOPS`` (default ``1``) and applies to
    ``X-Forwarded-For``, ``-Proto``, ``-Host`` and ``-Prefix`` alike. The
    remote address it yields is what request logs report.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXYFIX_HOPS", 1))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops)
