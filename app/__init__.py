from __future__ import annotations
from flask import Flask
from typing import Any, Dict

from core.logger import Logger
from core.scrape import Scrape


log = Logger.bind(__name__)


def create_app(config: Dict[str, Any] | None = None, scraper: Scrape | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update({
        'CORS_ORIGIN': '*',
    })
    if config:
        app.config.update(config)
    # keep envelope key order in responses
    app.json.sort_keys = False

    from .views import bp  # noqa: WPS433 (late import to avoid circular)
    app.register_blueprint(bp)

    # Shared scraper; stateless per request
    app.extensions['scraper'] = scraper or Scrape()

    @app.after_request
    def _cors(resp):
        resp.headers.setdefault('Access-Control-Allow-Origin', app.config['CORS_ORIGIN'])
        resp.headers.setdefault('Access-Control-Allow-Headers', 'Content-Type')
        resp.headers.setdefault('Access-Control-Allow-Methods', 'GET, POST, OPTIONS')
        return resp

    log.debug(f"app created cors_origin={app.config['CORS_ORIGIN']}")
    return app
