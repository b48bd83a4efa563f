"""CLI entrypoint for the demo server.

Usage:
    python -m main serve
    python -m main serve --port 8080
    python -m main routes
"""
import argparse
import logging
import os
import signal
import sys

from werkzeug.serving import make_server

from app import create_app
from config import load_config

logger = logging.getLogger(__name__)


def setup_logging(log_level='INFO'):
    """Configure root logging; unknown level names fall back to INFO."""
    numeric_level = getattr(logging, str(log_level).upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Invalid log level: {log_level}, defaulting to INFO")
        numeric_level = logging.INFO
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def port_arg(value):
    """argparse type for --port: an integer in 1..65535."""
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be between 1 and 65535, got {port}")
    return port


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt


def cmd_serve(args):
    # configure early so warnings from load_config are formatted
    setup_logging(os.environ.get('LOG_LEVEL', 'INFO'))
    config = load_config().with_overrides(host=args.host, port=args.port)
    setup_logging(config.log_level)
    app = create_app(config)
    try:
        server = make_server(config.host, config.port, app, threaded=True)
    except OSError as e:
        logger.error("Could not listen on %s:%s: %s", config.host, config.port, e)
        return 1
    except SystemExit:
        # werkzeug prints the bind error itself and exits
        logger.error("Could not listen on %s:%s", config.host, config.port)
        return 1
    signal.signal(signal.SIGTERM, _raise_interrupt)
    logger.info("Server running on port %s", server.port)
    logger.info("Serving static files from %s", config.static_root)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
    return 0


def cmd_routes(args):
    app = create_app(load_config())
    for rule in sorted(app.url_map.iter_rules(), key=lambda r: r.rule):
        methods = ','.join(sorted(rule.methods - {'HEAD', 'OPTIONS'}))
        print(f"{methods:10} {rule.rule}  -> {rule.endpoint}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(prog="demo-server", description="Demo JSON API and static file server")
    sub = parser.add_subparsers(dest="cmd")

    p_serve = sub.add_parser("serve", help="Run the HTTP server")
    p_serve.add_argument("--host", help="Bind address (overrides HOST)")
    p_serve.add_argument("--port", type=port_arg, help="Port (overrides PORT)")
    p_serve.set_defaults(func=cmd_serve)

    p_routes = sub.add_parser("routes", help="List registered routes")
    p_routes.set_defaults(func=cmd_routes)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
