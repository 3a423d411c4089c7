import uvicorn

from api import create_app
from util.config import Settings
from util.logging import setup_logging


def main():
    settings = Settings.from_env()
    logger = setup_logging("c2i", settings.debug, settings.log_format)
    logger.info("Starting c2i")

    app = create_app(settings, logger)
    uvicorn.run(app, host="0.0.0.0", port=settings.app_port, log_config=None)


if __name__ == "__main__":
    main()
