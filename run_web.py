"""
StepCalc Web API Launcher
Simple script to start the web server
"""
import logging
import sys

import config


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    print(f"Starting {config.APP_NAME} v{config.VERSION}...")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"API index:          http://{config.WEB_HOST}:{config.WEB_PORT}/api")
    print("="*60)

    try:
        from api import app
    except ImportError as e:
        print(f"Error importing modules: {e}")
        print("\nMake sure you have installed the required dependencies:")
        print("  pip install -e .")
        return 1

    # Each keypad session is driven by one request at a time
    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False, threaded=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
