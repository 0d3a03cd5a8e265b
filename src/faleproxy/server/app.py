"""
Fale Proxy - HTTP server
Main entry point for the Flask app that fetches a page and rewrites
"Yale" to "Fale" in its visible text.
"""

import argparse
import logging
from typing import Optional

from flask import Flask

from faleproxy.controllers.fetch_controller import FetchController
from faleproxy.core.managers.config_manager import ConfigManager, config_manager
from faleproxy.core.utils.configure_logging import configure_logger
from faleproxy.core.utils.path_utils import PathUtils
from faleproxy.server.routers.fetch_api_router import fetch_api_router
from faleproxy.server.routers.page_router import page_router

logger = logging.getLogger(__name__)


def create_app(config: Optional[ConfigManager] = None,
               controller: Optional[FetchController] = None) -> Flask:
    """
    Application factory to initialize the Flask instance with its controller.
    """
    config = config or config_manager
    flask_app = Flask(
        __name__,
        static_folder=str(PathUtils.get_static_dir()),
        static_url_path='',
    )

    # Inject Controller into App Config for Blueprint access
    flask_app.config['FETCH_CONTROLLER'] = controller or FetchController.from_config(config)

    flask_app.register_blueprint(fetch_api_router)
    flask_app.register_blueprint(page_router)

    return flask_app


def main(argv=None):
    """
    Parses arguments, configures logging and starts the server.
    """
    parser = argparse.ArgumentParser(description="Fale Proxy Server")
    parser.add_argument("--host", type=str, default=config_manager.get_nested("server.host", "0.0.0.0"),
                        help="Host interface to bind to")
    parser.add_argument("--port", type=int, default=int(config_manager.get_nested("server.port", 3001)),
                        help="Port to bind the server to (PORT env var also works)")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode and DEBUG logging")

    args = parser.parse_args(argv)

    configure_logger(
        "DEBUG" if args.debug else config_manager.get_nested("debug.level", "INFO"),
        silenced_loggers=config_manager.get_nested("debug.silenced_loggers", {}),
    )

    app = create_app()

    logger.info("Server is running on port %s", args.port)
    app.run(
        debug=args.debug,
        host=args.host,
        port=args.port,
        use_reloader=False
    )


if __name__ == '__main__':
    main()
