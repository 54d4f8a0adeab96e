"""
Run script for the Newsdesk API.
Starts the Quart app under Hypercorn.
"""
import asyncio
import os
import argparse
import logging

from dotenv import load_dotenv

from services.config import load_config
from services.logging import setup_logging

logger = logging.getLogger(__name__)


def run_server(host: str = '0.0.0.0', port: int = 8080, debug: bool = False):
    """Run the web server."""
    from hypercorn.config import Config
    from hypercorn.asyncio import serve

    from web.app import create_app

    app = create_app(load_config())

    logger.info(f"Starting Newsdesk API on http://{host}:{port}")

    config = Config()
    config.bind = [f"{host}:{port}"]
    config.use_reloader = debug
    config.accesslog = '-'
    config.errorlog = '-'

    asyncio.run(serve(app, config))


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description='Newsdesk API server')
    parser.add_argument('--host', default='0.0.0.0',
                        help='Host to bind to (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=None,
                        help='Port to bind to (default: $PORT or 8080)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging and reloader')

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.debug else logging.INFO)

    port = args.port or int(os.environ.get('PORT', 8080))
    run_server(host=args.host, port=port, debug=args.debug)


if __name__ == '__main__':
    main()
