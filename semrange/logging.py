# semrange/logging.py
from __future__ import annotations

import json
import logging
import sys

from semrange.settings import setting

__all__ = [
    "ROOT_LOGGER_NAME",
    "DevFormatter",
    "JsonFormatter",
    "configureLogging",
]



ROOT_LOGGER_NAME = "semrange"



class JsonFormatter(logging.Formatter):
    """One-line JSON records."""
    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, object] = {
            "ts": int(record.created * 1000),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            excType = record.exc_info[0]
            excValue = record.exc_info[1]
            base["exc"] = {
                "type": getattr(excType, "__name__", "Error"),
                "message": str(excValue),
                "stack": self.formatException(record.exc_info),
            }

        return json.dumps(base, ensure_ascii=False, default=str)



class DevFormatter(logging.Formatter):
    """Human-friendly console formatter."""
    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)
        if record.stack_info:
            msg += "\n" + str(record.stack_info)
        return f"{record.levelname}: [{record.name}] {msg}"



def configureLogging(level: str | None = None, fmt: str | None = None) -> logging.Logger:
    """
    Attach a single stderr handler to the package logger.

    Only the "semrange" logger is touched, never the root logger, so
    applications embedding the library keep their own configuration.
    Level and format default to the "logging.*" settings. Calling this
    again replaces the handler installed by the previous call.
    """
    levelName = str(level or setting("logging.level", "WARNING")).upper()
    formatName = str(fmt or setting("logging.format", "dev")).lower()
    numericLevel = getattr(logging, levelName, logging.WARNING)

    packageLogger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(packageLogger.handlers):
        if getattr(handler, "_semrangeHandler", False):
            packageLogger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numericLevel)
    handler.setFormatter(JsonFormatter() if formatName == "json" else DevFormatter())
    handler._semrangeHandler = True  # type: ignore[attr-defined]

    packageLogger.addHandler(handler)
    packageLogger.setLevel(numericLevel)
    return packageLogger
