import logging

import uvicorn

from imageproc.app import create_app
from imageproc.config import config
from imageproc.logging_config import setup_logging

setup_logging(config.LOG_LEVEL)
logger = logging.getLogger("imageproc")

app = create_app(config)


def run():
    logger.info("Server running on port %d", config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_config=None)


if __name__ == "__main__":
    run()
