#!/usr/bin/env python3
import logging
import sys

from simplyserver import DEFAULT_CFG, ServerError, serve

LOG_FORMAT = (
    "%(asctime)s - pid:%(process)d [%(levelname)-.1s] "
    "%(module)s.%(funcName)s:%(lineno)d - %(message)s"
)

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        serve(DEFAULT_CFG)
    except ServerError as e:
        logger.error("%s", e)
        sys.exit(1)

if __name__ == "__main__":
    main()
