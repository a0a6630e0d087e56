"""Run the API with uvicorn: python -m authapi"""

import logging
import sys
import uvicorn
from authapi.core.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )
    logger = logging.getLogger("authapi")
    logger.info(f"Server running on http://localhost:{settings.PORT}")
    uvicorn.run(
        "authapi.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
