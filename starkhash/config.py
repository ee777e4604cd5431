"""
Copyright (c) 2020, the Decred developers
See LICENSE for details

Configuration settings for starkhash.

Settings are read from a sectionless INI file, starkhash.conf, in the
application data directory. Recognized keys:

  loglevel = debug      # a level name or number
  logfile = /path/to/starkhash.log

A --loglevel command line argument overrides the file.
"""

import argparse
import logging
import os

from starkhash import InvalidArgument
from starkhash.util import helpers


APP_NAME = "starkhash"

# The master configuration file name.
CONFIG_NAME = "starkhash.conf"

CONFIG_KEYS = ("loglevel", "logfile")


def dataDir():
    """
    The OS-appropriate data directory for starkhash.
    """
    return helpers.appDataDir(APP_NAME)


def parseLogLevel(lvl):
    """
    Convert a log level name or number to the logging module's int level.

    Args:
        lvl (str or int): e.g. "debug", "WARNING" or "10".

    Returns:
        int: The logging level.
    """
    if isinstance(lvl, int):
        return lvl
    s = str(lvl).strip()
    if s.isdigit():
        return int(s)
    level = logging.getLevelName(s.upper())
    if not isinstance(level, int):
        raise InvalidArgument(f"unknown log level {lvl!r}")
    return level


class StarkHashConfig:
    """
    StarkHashConfig is configuration settings loaded from the config file and
    the command line.
    """

    def __init__(self, path=None, argv=None):
        """
        Args:
            path (str): optional. The configuration file path. Defaults to
                starkhash.conf in the data directory.
            argv (list(str)): optional. Command line arguments to parse.
                Defaults to sys.argv.
        """
        self.path = path if path else os.path.join(dataDir(), CONFIG_NAME)
        self.file = {}
        if os.path.isfile(self.path):
            self.file = helpers.readINI(self.path, CONFIG_KEYS)
        parser = argparse.ArgumentParser(add_help=False)
        parser.add_argument("--loglevel", help="default log level")
        args, _ = parser.parse_known_args(argv)
        if args.loglevel:
            self.file["loglevel"] = args.loglevel
        self.logLevel = parseLogLevel(self.file.get("loglevel", logging.INFO))
        self.logFile = self.file.get("logfile")

    def get(self, key):
        """
        Retrieve a raw setting, or None if it was not set.
        """
        return self.file.get(key)

    def applyLogging(self):
        """
        Set up logging with the configured level and log file.
        """
        if self.logFile:
            helpers.mkdir(os.path.dirname(os.path.abspath(self.logFile)))
        helpers.prepareLogging(filepath=self.logFile, logLvl=self.logLevel)


starkHashConfig = None


def load(path=None, argv=None):
    """
    Load and return the current configuration.

    The configuration is only loaded once. Successive calls to the modular `load`
    function will return the same instance.

    Returns:
        StarkHashConfig: The current configuration.
    """
    global starkHashConfig
    if not starkHashConfig:
        starkHashConfig = StarkHashConfig(path, argv)
    return starkHashConfig
