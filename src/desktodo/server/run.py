"""CLI entry point for launching the local API with uvicorn."""

import uvicorn

from desktodo.config import Config
from desktodo.logger import setup_logger

from .app import create_app


def main() -> None:
    """Run the local API server (loopback only)."""
    config = Config.load()
    setup_logger(log_level=config.log_level, log_file=config.log_file)
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
