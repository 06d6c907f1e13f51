"""Application bootstrapper for the activity catalog browser."""
from __future__ import annotations

import logging

from .config import DEFAULT_CONFIG
from .web.app import bootstrap_app

logger = logging.getLogger(__name__)


def run() -> None:
    """Entrypoint used by the CLI to launch the web UI."""

    logging.basicConfig(level=logging.INFO)
    config = DEFAULT_CONFIG
    app, view_state = bootstrap_app(config)
    logger.info("Serving catalog from %s", config.catalog.endpoint)
    try:
        app.run(debug=config.environment == "development", use_reloader=False)
    finally:
        view_state.close()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    run()
