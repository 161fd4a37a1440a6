# main.py
import sys

from app_logging import logger
from views import RestCycleApp


def main():
    """Runs the terminal app until the user quits."""
    app = RestCycleApp()
    try:
        app.run()
    finally:
        logger.info("app_shutdown")
        print("RestCycle has shut down.", file=sys.stderr)


if __name__ == "__main__":
    main()
