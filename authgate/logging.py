"""Provides JSON loggers configured from the environment."""

import logging
import os
import sys
from typing import IO

from pythonjsonlogger import jsonlogger

FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def getLogger(name: str, stream: IO = sys.stderr) -> logging.Logger:
    """
    Get a logger that emits one JSON document per record.

    The level is taken from the ``LOGLEVEL`` environment variable, and
    defaults to ``INFO``.

    Parameters
    ----------
    name : str
        Usually ``__name__`` of the calling module.
    stream : file-like
        Where records are written.

    Returns
    -------
    :class:`logging.Logger`

    """
    logger = logging.getLogger(name)
    if not logger.handlers:     # Don't stack handlers on repeat calls.
        handler = logging.StreamHandler(stream)
        handler.setFormatter(jsonlogger.JsonFormatter(
            FORMAT,
            rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
        ))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(int(os.environ.get('LOGLEVEL', logging.INFO)))
    return logger
