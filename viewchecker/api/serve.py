"""Run the API server: python -m viewchecker.api.serve"""
import logging

import uvicorn

from viewchecker.config import load_settings

logger = logging.getLogger("viewchecker.server")


def main():
    settings = load_settings()
    logger.info(f"ViewChecker API starting on port {settings.port} ({settings.environment})")
    uvicorn.run("viewchecker.api.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
