#!/usr/bin/env python3
"""
Runner script for the Greenhorn Deploy webhook
Usage: python run.py [address:port] [path_to_repo] --repo owner/name
The shared secret is read from GREENHORN_DEPLOY_SIGNATURE (or a .env file).
"""

import logging
import sys

import uvicorn

from config import ConfigurationError, load_settings
from main import create_app

logger = logging.getLogger("greenhorn_deploy")

def main(argv=None):
    try:
        settings = load_settings(argv)
    except ConfigurationError as e:
        print(f"greenhorn-deploy: {e}", file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    logger.info(f"Watching {settings.repo_name} {settings.branch}")
    logger.info(f"Working copy: {settings.repo_path}")
    if not settings.repo_path.is_dir():
        logger.warning(f"{settings.repo_path} is not a directory, pulls will fail until it exists")
    logger.debug(f"listening on {settings.host}:{settings.port}")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )

if __name__ == "__main__":
    main()
