"""Module for initializing settings related to the built-in ballotbox logger
Functions:
-get_logger"""

import logging, coloredlogs
import os

from ballotbox import config

VALID_LVLS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
_LOG_LVL = os.getenv('LOG_LEVEL', None)
if _LOG_LVL:
    assert _LOG_LVL in VALID_LVLS, "Log level {} not in valid levels {}".format(_LOG_LVL, VALID_LVLS)
    _LOG_LVL = getattr(logging, _LOG_LVL)
else:
    _LOG_LVL = logging.INFO

format = '%(asctime)s.%(msecs)03d %(name)s[%(process)d] <{}> %(levelname)-2s %(message)s'.format(
    os.getenv('HOST_NAME', 'ballotbox')
)

"""
Custom Styling
"""

coloredlogs.DEFAULT_LEVEL_STYLES = {
    'critical': {'color': 'white', 'bold': True, 'background': 'red'},
    'error': {'color': 'red'},
    'warning': {'color': 'yellow'},
    'info': {'color': 'white'},
    'debug': {'color': 'green'},
}
coloredlogs.DEFAULT_FIELD_STYLES = {
    'asctime': {'color': 'green'},
    'levelname': {'color': 'black', 'bright': True},
    'name': {'color': 'blue'},
}


class ColoredStreamHandler(logging.StreamHandler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setFormatter(
            coloredlogs.ColoredFormatter(format)
        )


def _file_handler(name):
    try:
        os.makedirs(config.LOG_DIR, exist_ok=True)
    except OSError as e:
        print("Possible error creating log directory: {}".format(e))
        return None

    handler = logging.FileHandler(os.path.join(config.LOG_DIR, '{}.log'.format(name or 'ballotbox')), delay=True)
    handler.setFormatter(logging.Formatter(format))
    return handler


def get_logger(name=''):
    log = logging.getLogger(name)
    log.setLevel(_LOG_LVL)

    if not log.handlers:
        log.addHandler(ColoredStreamHandler())

        if config.LOG_DIR:
            handler = _file_handler(name)
            if handler is not None:
                log.addHandler(handler)

        log.propagate = False

    return log

