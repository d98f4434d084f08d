from __future__ import annotations

import logging
import os


def setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    level_name = os.getenv("KARAOKE_SEARCH_LOG_LEVEL")
    if level_name:
        try:
            level = getattr(logging, level_name.upper())
        except AttributeError:
            pass

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


class Logger:
    """
    Diagnostic sink handed to every component that can fail partially.

    `log` is progress chatter, emitted at INFO only when verbose;
    `error` is always emitted.
    """

    def __init__(self, verbose: bool = False, name: str = "karaoke_search"):
        self.verbose = verbose
        self._logger = logging.getLogger(name)

    def log(self, message: str, *args: object) -> None:
        level = logging.INFO if self.verbose else logging.DEBUG
        self._logger.log(level, message, *args)

    def error(self, message: str, *args: object) -> None:
        self._logger.error(message, *args)
