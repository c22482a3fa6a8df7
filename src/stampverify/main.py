"""Application entry point for stampverify backend server."""

from stampverify.app import App
from stampverify.config import Config
from stampverify.logging import setup_logging
from stampverify.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
