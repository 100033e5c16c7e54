#!/usr/bin/env python3
"""
Serve the matching and CRUD API with uvicorn, using the settings in config.py
"""
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn
from config import API_HOST, API_PORT, API_RELOAD, LOG_LEVEL

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(level=LOG_LEVEL.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    base = f"http://{API_HOST}:{API_PORT}"
    logger.info(f"Project matching: {base}/api/matching/project/{{id}}")
    logger.info(f"Skill-set search: {base}/api/matching/search?skills=1,2")
    logger.info(f"OpenAPI docs: {base}/docs")

    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, reload=API_RELOAD, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
