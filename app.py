#!/usr/bin/env python3
"""
Run script for the Pharmacy Inventory application
"""

import argparse
import sys

from dotenv import load_dotenv

# Load environment variables from .env file before the config is read
load_dotenv()

from pharma import create_app, get_config  # noqa: E402
from pharma.build import build_database  # noqa: E402
from pharma.logger import get_logger  # noqa: E402

logger = get_logger("pharma.run")


def parse_arguments():
    parser = argparse.ArgumentParser(description='Pharmacy Inventory')
    parser.add_argument('--build-only', action='store_true',
                        help='Create tables (and demo data unless disabled), then exit')
    parser.add_argument('--reset', action='store_true',
                        help='Drop all tables before building')
    parser.add_argument('--no-demo-data', action='store_false', dest='demo_data',
                        help='Do not insert demo suppliers, medicines and orders')
    return parser.parse_args()


def main():
    args = parse_arguments()
    app = create_app()
    config = get_config(app)

    build_database(app, reset=args.reset, seed_demo=args.demo_data)

    if args.build_only:
        logger.info("Build completed. Exiting without starting web server.")
        return 0

    if config.debug:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {config.host}:{config.port} (debug={config.debug})")
    app.run(debug=config.debug, host=config.host, port=config.port, use_reloader=False)
    return 0


if __name__ == '__main__':
    sys.exit(main())
