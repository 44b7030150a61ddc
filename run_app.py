"""
Development server for the specpaste API.

    python run_app.py
    python run_app.py --port 8080 --log-level DEBUG

Options fall back to the FLASK_* and LOG_LEVEL settings from the environment.
"""
import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from specpaste.api import create_app
from specpaste.config import Config
from specpaste.logger import get_logger, setup_logger

logger = get_logger("run_app")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the specpaste API with the Flask dev server")
    parser.add_argument("--host", default=Config.FLASK_HOST)
    parser.add_argument("--port", type=int, default=Config.FLASK_PORT)
    parser.add_argument("--debug", action="store_true", default=Config.FLASK_DEBUG,
                        help="Enable the Flask debugger and reloader")
    parser.add_argument("--log-level", default=Config.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        type=str.upper)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logger(level=args.log_level)

    # Crowd aliases and URL import are optional
    for error in Config.validate():
        logger.warning(f"Config: {error}")

    app = create_app()
    logger.info(f"Serving specpaste on http://{args.host}:{args.port} (debug={args.debug})")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
