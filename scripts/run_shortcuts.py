import argparse
import logging

from messenger_shortcuts.config import settings
from messenger_shortcuts.shortcuts.orchestrator import run_shortcuts_blocking


def main():
    parser = argparse.ArgumentParser(description="Keyboard shortcuts for the Messenger web app")
    parser.add_argument("--url", default=None, help="Page to open (defaults to START_URL)")
    parser.add_argument("--no-server", action="store_true", help="Do not start the HTTP control channel")
    parser.add_argument("--log-level", default=settings.log_level, help="Python logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    run_shortcuts_blocking(start_url=args.url, serve=False if args.no_server else None)
    print("[shortcuts] Window closed, exiting")


if __name__ == "__main__":
    main()
