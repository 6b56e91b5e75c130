"""Uvicorn server runner."""

import copy
from typing import Any

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from coffee_tracker.app import App
from coffee_tracker.config import Config
from coffee_tracker.web.server import create_fastapi_app


def build_log_config(debug: bool) -> dict[str, Any]:
    """Uvicorn logging config: one line per request, plus the client address when debugging."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    access_fmt = '%(asctime)s - "%(request_line)s" %(status_code)s'
    if debug:
        access_fmt = '%(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["access"]["fmt"] = access_fmt
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"
    return log_config


def run_server(app: App, config: Config) -> None:
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=build_log_config(config.debug),
        log_level="debug" if config.debug else "info",
        access_log=True,
        proxy_headers=True,  # Secure cookies follow X-Forwarded-Proto behind a TLS-terminating proxy
    )
