#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
import logging

import colorlog
from wrapt import synchronized


class Log(object):
    """
    Logging module

    Call get() to get a cached instance of a specific logger.
    Colored output can optionally be enabled, and the level of
    every logger handed out so far can be changed at once.
    """


    _LOGGERS = {}
    _HANDLERS = {}
    _use_color = False
    _level = logging.WARNING

    @classmethod
    def _formatter(cls):
        if cls._use_color:
            return colorlog.ColoredFormatter( \
                ' %(log_color)s%(name)s/%(levelname)-8s%(reset)s |'
                ' %(log_color)s%(message)s%(reset)s')

        return logging.Formatter(' %(name)s/%(levelname)-8s | %(message)s')


    @synchronized
    @classmethod
    def get(cls, tag):
        """
        Get the global logger instance for the given tag

        :param tag: the log tag
        :return: the logger instance
        """
        if tag not in cls._LOGGERS:
            handler = colorlog.StreamHandler()
            handler.setFormatter(cls._formatter())

            logger = logging.getLogger(tag)
            logger.addHandler(handler)
            logger.setLevel(cls._level)

            cls._LOGGERS[tag] = logger
            cls._HANDLERS[tag] = handler

        return cls._LOGGERS[tag]


    @synchronized
    @classmethod
    def enable_color(cls, enable):
        """
        Enable colored output for all current and future loggers
        """
        cls._use_color = enable
        for handler in cls._HANDLERS.values():
            handler.setFormatter(cls._formatter())


    @synchronized
    @classmethod
    def set_level(cls, level):
        """
        Set the level for all current and future loggers

        :param level: a logging level, e.g. logging.DEBUG
        """
        cls._level = level
        for logger in cls._LOGGERS.values():
            logger.setLevel(level)
