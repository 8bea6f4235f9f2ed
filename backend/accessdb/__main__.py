# __main__.py
# Process entry point: python -m accessdb (or the accessdb console script)

import logging

import uvicorn

from .config import Settings
from .main import create_app

logger = logging.getLogger("accessdb")


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    app = create_app(settings)
    logger.info("Server listening on http://localhost:%d (root %s)", settings.port, settings.root_dir)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
