"""Allow running the API as: python -m nofomo_core.api [--config path]."""

import argparse

from nofomo_core.api.runner import main

parser = argparse.ArgumentParser(description="NoFOMO decision API")
parser.add_argument("--config", default=None, help="Path to config.yaml")
parser.add_argument("--host", default=None, help="Bind address (overrides config)")
parser.add_argument("--port", type=int, default=None, help="Port (overrides config)")
args = parser.parse_args()
main(config_path=args.config, host=args.host, port=args.port)
