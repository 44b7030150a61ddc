"""
WSGI entry point for production deployment.

Use this file with a WSGI server:

    gunicorn wsgi:app --bind 0.0.0.0:5000 --workers 4
    waitress-serve --host=0.0.0.0 --port=5000 wsgi:app

    # Or run directly (waitress)
    python wsgi.py
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from waitress import serve

from specpaste.api import create_app
from specpaste.config import Config
from specpaste.logger import get_logger

logger = get_logger(__name__)

# Create the Flask application instance
app = create_app()


def main():
    """Run with the waitress production server."""
    host = Config.FLASK_HOST
    port = Config.FLASK_PORT

    errors = Config.validate()
    if errors:
        logger.warning("Configuration warnings:")
        for error in errors:
            logger.warning(f"  - {error}")

    logger.info(f"Starting specpaste on {host}:{port}")
    logger.info(f"Environment: {Config.FLASK_ENV}")
    serve(app, host=host, port=port, threads=4)


if __name__ == "__main__":
    main()
