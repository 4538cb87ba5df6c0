"""Application entry point for the Threads backend server."""

from threads.app import App
from threads.config import Config
from threads.logging import setup_logging
from threads.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
