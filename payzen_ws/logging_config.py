import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_HANDLER_NAME = "payzen_ws.stdout"


def init_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Send records to stdout for applications embedding the SDK.

    Calling it again only changes the level; the stdout handler is installed once.
    """
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger()
    root.setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
