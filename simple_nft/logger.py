"""Logging setup shared by every simple_nft module

LOG_LEVEL   one of DEBUG, INFO, WARNING, ERROR, CRITICAL (default WARNING)
LOG_FILE    optional path, adds an uncolored file handler
HOST_NAME   shown in each record (default Node)
"""

import logging
import os

import coloredlogs

LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

_level_name = os.getenv('LOG_LEVEL', 'WARNING')
assert _level_name in LEVELS, 'Log level {} not in valid levels {}'.format(_level_name, LEVELS)
LOG_LEVEL = getattr(logging, _level_name)

LOG_FILE = os.getenv('LOG_FILE')

LOG_FORMAT = '%(asctime)s.%(msecs)03d %(name)s[%(process)d] <{}> %(levelname)-2s %(message)s'.format(
    os.getenv('HOST_NAME', 'Node'))

LEVEL_STYLES = {
    'critical': {'color': 'white', 'bold': True, 'background': 'red'},
    'error': {'color': 'red'},
    'warning': {'color': 'yellow'},
    'info': {'color': 'cyan'},
    'debug': {'color': 'green'},
}

FIELD_STYLES = {
    'asctime': {'color': 'green'},
    'levelname': {'color': 'black', 'bright': True},
    'name': {'color': 'blue'},
}


class ColoredStreamHandler(logging.StreamHandler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setFormatter(coloredlogs.ColoredFormatter(LOG_FORMAT,
                                                       level_styles=LEVEL_STYLES,
                                                       field_styles=FIELD_STYLES))


_handlers = []


def _shared_handlers():
    if not _handlers:
        _handlers.append(ColoredStreamHandler())

        if LOG_FILE:
            file_handler = logging.FileHandler(LOG_FILE, delay=True)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            _handlers.append(file_handler)

    return _handlers


def get_logger(name=''):
    log = logging.getLogger(name)
    log.setLevel(LOG_LEVEL)

    for handler in _shared_handlers():
        if handler not in log.handlers:
            log.addHandler(handler)

    # Records would print twice if the root logger also had a handler
    log.propagate = False

    return log
