#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A common interface to all vpkdir configuration settings available via environment variables.
This module is also host to the logging configuration.
"""
from __future__ import annotations

import os
import logging

from enum import IntEnum
from typing import Optional, TypeVar, Generic

_T = TypeVar('_T')


class LogLevel(IntEnum):
    """
    An enumeration representing the current log level:
    """
    DETACHED = logging.CRITICAL + 100
    """
    The reader is used as a library and nothing should be written to the terminal; problems are
    only communicated by raising exceptions.
    """

    @classmethod
    def FromVerbosity(cls, verbosity: int):
        if verbosity < 0:
            return cls.DETACHED
        return {
            0: cls.WARNING,
            1: cls.INFO,
            2: cls.DEBUG
        }.get(verbosity, cls.DEBUG)

    CRITICAL = logging.CRITICAL  # noqa
    ERROR    = logging.ERROR     # noqa
    WARNING  = logging.WARNING   # noqa
    INFO     = logging.INFO      # noqa
    DEBUG    = logging.DEBUG     # noqa


class VpkFormatter(logging.Formatter):

    NAMES = {
        logging.CRITICAL : 'failure',
        logging.ERROR    : 'failure',
        logging.WARNING  : 'warning',
        logging.INFO     : 'comment',
        logging.DEBUG    : 'verbose',
    }

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.custom_level_name = self.NAMES.get(record.levelno, record.levelname.lower())
        return super().formatMessage(record)


class EnvironmentVariableSetting(Generic[_T]):
    key: str
    value: Optional[_T]

    def __init__(self, name: str):
        self.key = F'VPKDIR_{name}'
        self.value = self.read()

    def read(self) -> _T:
        return None


class EVBool(EnvironmentVariableSetting[bool]):
    def read(self):
        value = os.environ.get(self.key, None)
        if value is None:
            return False
        else:
            value = value.lower().strip()
        if not value:
            return False
        if value.isdigit():
            return bool(int(value))
        return value not in {'no', 'off', 'false'}


class EVLog(EnvironmentVariableSetting[Optional[LogLevel]]):
    def read(self):
        try:
            loglevel = os.environ[self.key]
        except KeyError:
            return None
        if loglevel.isdigit():
            return LogLevel.FromVerbosity(int(loglevel))
        try:
            loglevel = LogLevel[loglevel.upper()]
        except KeyError:
            levels = ', '.join(ll.name for ll in LogLevel)
            logger(__name__, LogLevel.WARNING).warning(
                F'ignoring unknown verbosity "{loglevel!r}"; pick from: {levels}')
            return None
        else:
            return loglevel


def logger(name: str, level: LogLevel | None = None) -> logging.Logger:
    """
    Obtain a logger which is configured with the default vpkdir format. When the variable
    `VPKDIR_VERBOSITY` is set and no explicit level is given, the variable determines the log
    level of the logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        stream = logging.StreamHandler()
        stream.setFormatter(VpkFormatter(
            '({asctime}) {custom_level_name} in {name}: {message}',
            style='{',
            datefmt='%H:%M:%S',
        ))
        logger.addHandler(stream)
        if level is None:
            level = environment.verbosity.value
        logger.setLevel(LogLevel.WARNING if level is None else level)
    logger.propagate = False
    return logger


class environment:
    verbosity = EVLog('VERBOSITY')
    lenient = EVBool('LENIENT')
