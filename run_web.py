"""
PocketCalc Web Portal Launcher
Simple script to start the web server
"""
import logging
import sys
import os

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config
from api import create_app


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    print("Starting PocketCalc Web Portal...")
    print(f"Listening on http://{config.WEB_HOST}:{config.WEB_PORT}/api")
    print()
    try:
        create_app().run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
    except OSError as e:
        print(f"Error starting server: {e}")
        print("\nTroubleshooting:")
        print("1. Check if another application is using the port")
        print("2. Check firewall settings")
        sys.exit(1)


if __name__ == "__main__":
    main()
