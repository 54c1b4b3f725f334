"""
photodupes - web server
=======================
Serves the JSON API used by a browser front end to scan folders, review
duplicate groups and delete files.

Started through the CLI: photodupes serve [--port 5000] [--no-browser]
"""

import logging
import threading
import webbrowser

from flask import Flask

from .api import api
from .context import AppContext
from .state import ScanState


# Logging levels
LOG_QUIET = 0    # No output except errors
LOG_MINIMAL = 1  # Startup info only (default)
LOG_VERBOSE = 2  # All Flask request logs


def create_app(context: AppContext, log_level: int = LOG_MINIMAL) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        context: Application context shared by every request
        log_level: Logging verbosity level

    Returns:
        Configured Flask app instance
    """
    app = Flask(__name__)

    app.extensions['photodupes'] = {
        'context': context,
        'scan_state': ScanState(),
    }

    if log_level < LOG_VERBOSE:
        # Suppress Flask's default request logging
        log = logging.getLogger('werkzeug')
        log.setLevel(logging.ERROR if log_level == LOG_QUIET else logging.WARNING)

    app.register_blueprint(api)

    return app


def suppress_flask_banner():
    """Suppress Flask's development server banner and startup messages."""
    try:
        import flask.cli
        flask.cli.show_server_banner = lambda *args, **kwargs: None
    except (ImportError, AttributeError):
        pass

    logging.getLogger('werkzeug').setLevel(logging.ERROR)


def serve(
    context: AppContext,
    port: int = 5000,
    open_browser: bool = True,
    log_level: int = LOG_MINIMAL,
) -> None:
    """
    Run the development server until interrupted.

    Args:
        context: Application context
        port: Port to listen on (localhost only)
        open_browser: Open the API root in a browser after startup
        log_level: Logging verbosity level
    """
    url = f'http://localhost:{port}'

    if log_level >= LOG_MINIMAL:
        print()
        print(f"  photodupes API running at: {url}")
        print("  Press Ctrl+C to stop")
        print()

    if log_level < LOG_VERBOSE:
        suppress_flask_banner()

    app = create_app(context, log_level)

    if open_browser:
        threading.Timer(1.5, lambda: webbrowser.open(f'{url}/api/ping')).start()

    try:
        app.run(
            host='127.0.0.1',
            port=port,
            debug=False,
            threaded=True,
            use_reloader=False
        )
    except KeyboardInterrupt:
        if log_level >= LOG_MINIMAL:
            print("\n  Server stopped\n")
