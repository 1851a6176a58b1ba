"""
➡️ But : Configuration centralisée du logging.

Chaque module récupère son logger via get_logger(__name__).
configure_logging() est appelée une fois par le point d'entrée (niveau venant de Settings.LOG_LEVEL).
"""

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def configure_logging(level: str = "INFO") -> None:
    """Installe le handler stdout sur le root logger (une seule fois), puis applique le niveau."""
    global _initialized
    root = logging.getLogger()
    if not _initialized:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        root.addHandler(handler)
        _initialized = True
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
