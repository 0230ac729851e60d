import logging

import uvicorn
from dotenv import load_dotenv

from tvglance.core.config import get_settings

load_dotenv()

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()
    logger.info("Starting tvglance on http://127.0.0.1:8000")
    uvicorn.run("tvglance.main:app", host="127.0.0.1", port=8000, reload=settings.debug)


if __name__ == "__main__":
    main()
