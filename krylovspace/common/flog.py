'''
Console and file logging with verbosity control for the krylovspace package.

The Logger wraps a standard `logging.Logger`, adds indentation levels and
optional ANSI colours, and can mirror everything into a log file.

@note File logging is enabled only if the environment variable PYLOGFILE is set to a non-zero value.
@note Coloured console output is disabled by setting PYLOGCOLORS to '0'.

-------------------------------------------------------
file        :   krylovspace/common/flog.py
description :   Logger class and the per-process global logger.
-------------------------------------------------------
'''

__all__         = [
    "Logger",
    "Colors",
    "get_global_logger"
]

import os
import re
import sys
import logging
import threading
from datetime import datetime
from typing import Optional

######################################################
#! COLORS
######################################################

class Colors:
    """
    ANSI colour codes for console output.

    Attributes:
        black, red, green, yellow, blue (str):
            Escape codes of the respective colours.
        white (str):
            Escape code resetting the colour to the terminal default.
    """

    black   = "\033[30m"
    red     = "\033[31m"
    green   = "\033[32m"
    yellow  = "\033[33m"
    blue    = "\033[34m"
    white   = "\033[0m"

    def __init__(self, color : str):
        self.color = color

    def __str__(self) -> str:
        return getattr(Colors, str(self.color).lower(), Colors.white)

    def __repr__(self) -> str:
        return str(self)

    def __call__(self, text: str) -> str:
        return f"{self}{text}{Colors.white}"

# Regex for ANSI colour codes (CSI sequences: ESC [ ... m)
_ansi_escape = re.compile(r'\x1b\[[0-9;]*m')

class StripAnsiFormatter(logging.Formatter):
    ''' Formatter for file handlers, colour codes make no sense in a file. '''

    def format(self, record):
        return _ansi_escape.sub('', super().format(record))

######################################################
#! LOGGER
######################################################

ENV_LOGGER_FILE     = 'PYLOGFILE'
ENV_LOGGER_COLORS   = 'PYLOGCOLORS'
_DATE_FMT           = "%d_%m_%Y_%H-%M_%S"

class Logger:
    """
    Logger class for handling console and file logging with verbosity control.
    """

    LEVELS = {
        logging.DEBUG   : 'debug',
        logging.INFO    : 'info',
        logging.WARNING : 'warning',
        logging.ERROR   : 'error'
    }

    LEVELS_R = {v: k for k, v in LEVELS.items()}

    def __init__(self,
                name            : str           = "krylovspace",
                logfile         : Optional[str] = None,
                lvl             : int           = logging.INFO,
                use_ts_in_cmd   : bool          = False):
        """
        Initialize the logger instance.

        Args:
            name (str):
                Name of the underlying `logging` logger.
            logfile (str):
                Name of the log file (without extension). Only used when PYLOGFILE is set.
            lvl (int or str):
                Logging level (default: logging.INFO).
            use_ts_in_cmd (bool):
                Whether to print a timestamp in console output (default: False).
        """
        self.now_str            = datetime.now().strftime(_DATE_FMT)
        self.lvl                = Logger.LEVELS_R.get(lvl, logging.INFO) if isinstance(lvl, str) else lvl
        self.has_colors         = sys.stdout.isatty() and os.environ.get(ENV_LOGGER_COLORS, '1') != '0'
        self.logfile            = None

        self.logger             = logging.getLogger(name)
        self.logger.setLevel(self.lvl)
        self.logger.propagate   = False

        # a fresh Logger replaces whatever handlers the name had before
        for h in list(self.logger.handlers):
            self.logger.removeHandler(h)
            h.close()

        console_fmt = '%(asctime)s [%(levelname)s] %(message)s' if use_ts_in_cmd else '[%(levelname)s] %(message)s'
        ch          = logging.StreamHandler(sys.stdout)
        ch.setLevel(self.lvl)
        ch.setFormatter(logging.Formatter(console_fmt, datefmt=_DATE_FMT))
        self.logger.addHandler(ch)

        if logfile is not None and os.environ.get(ENV_LOGGER_FILE, '0') != '0':
            self.configure("./log", logfile or self.now_str)

    # --------------------------------------------------------------

    @staticmethod
    def colorize(txt: str, color: Optional[str]) -> str:
        """
        Wrap the text in the ANSI codes of the given colour.
        """
        if not color or color.lower() == 'white':
            return str(txt)
        return Colors(color)(txt)

    # --------------------------------------------------------------

    def configure(self, directory: str, basename: str):
        """
        Mirror the log into `<directory>/<basename>.log`.

        Args:
            directory (str):
                Directory of the log file, created if missing.
            basename (str):
                File name without the `.log` extension.
        """
        os.makedirs(directory, exist_ok=True)
        basename        = basename[:-len('.log')] if basename.endswith('.log') else basename
        self.logfile    = os.path.join(directory, f'{basename}.log')

        fh              = logging.FileHandler(self.logfile, mode='w', encoding='utf-8')
        fh.setLevel(self.lvl)
        fh.setFormatter(StripAnsiFormatter('%(asctime)s [%(levelname)s] %(message)s', datefmt=_DATE_FMT))
        self.logger.addHandler(fh)
        self.info(f"Log file created: {self.logfile}")

    # --------------------------------------------------------------

    @staticmethod
    def print_tab(lvl=0) -> str:
        ''' Indentation prefix of a message. '''
        return '\t' * lvl + ('->' if lvl > 0 else '')

    @staticmethod
    def print(msg: str, lvl=0) -> str:
        return f"{Logger.print_tab(lvl)}{msg}"

    # --------------------------------------------------------------

    def _emit(self, level: int, msg: str, lvl: int, verbose: bool, color: Optional[str]):
        if not verbose or not self.logger.isEnabledFor(level):
            return
        if color is not None and self.has_colors:
            msg = self.colorize(msg, color)
        self.logger.log(level, Logger.print(msg, lvl))

    def say(self, *args, end=True, log=logging.INFO, lvl=0, verbose=True, color=None):
        """
        Log multiple messages as one record.

        Args:
            *args:
                Messages to log.
            end (bool):
                Join the messages with newlines (True) or spaces (False).
            log (int or str):
                Log level, strings are matched by their first letter.
            lvl (int):
                Indentation level.
            verbose (bool):
                Log only if True.
        """
        if isinstance(log, str):
            log = {'i': logging.INFO, 'e': logging.ERROR, 'w': logging.WARNING}.get(log.lower()[:1], logging.DEBUG)
        joined = ('\n' if end else ' ').join(str(arg) for arg in args)
        self._emit(log, joined, lvl, verbose, color)

    def info(self, msg: str, lvl=0, verbose=True, color=None):
        self._emit(logging.INFO, msg, lvl, verbose, color)

    def debug(self, msg: str, lvl=0, verbose=True, color=None):
        self._emit(logging.DEBUG, msg, lvl, verbose, color)

    def warning(self, msg: str, lvl=0, verbose=True, color='yellow'):
        self._emit(logging.WARNING, msg, lvl, verbose, color)

    def error(self, msg: str, lvl=0, verbose=True, color='red'):
        self._emit(logging.ERROR, msg, lvl, verbose, color)

    def title(self, tail: str, desired_size: int = 50, fill: str = '=', lvl=0, verbose=True, color=None):
        """
        Log `tail` centred in a line of `fill` characters.
        """
        if len(tail) + 2 + lvl * 6 > desired_size:
            self.info(tail, lvl, verbose, color)
            return
        side    = (desired_size - len(tail)) // (2 * len(fill))
        out     = (fill * side) + tail + (fill * side)
        self.info(out[:desired_size], lvl, verbose, color)

######################################################
#! GLOBAL LOGGER
######################################################

_G_LOGGER     = None
_G_LOGGER_PID = None
_G_LOCK       = threading.Lock()

def get_global_logger(**kwargs) -> Logger:
    """
    One Logger per process (PID), safe across threads and forks.

    Args:
        **kwargs: Arguments passed to the Logger constructor on first use.
        - name (str): Name of the logger (default: "krylovspace").
        - lvl (int): Logging level (default: logging.INFO).
        - use_ts_in_cmd (bool): Timestamps in console output (default: True).
        - logfile (str or None): Log file base name (default: None).

    Example
    -------
        >>> logger = get_global_logger()
        >>> logger.info("Krylov subspace ready.")
        >>> logger.debug("Happy breakdown at step 3.", lvl=1)
    """
    global  _G_LOGGER, _G_LOGGER_PID
    pid     = os.getpid()

    if _G_LOGGER is not None and _G_LOGGER_PID == pid:
        return _G_LOGGER

    with _G_LOCK:
        if _G_LOGGER is not None and _G_LOGGER_PID == pid:
            return _G_LOGGER

        _G_LOGGER       = Logger(
            name            = kwargs.get("name",            "krylovspace"),
            lvl             = kwargs.get("lvl",             logging.INFO),
            use_ts_in_cmd   = kwargs.get("use_ts_in_cmd",   True),
            logfile         = kwargs.get("logfile",         None),
        )
        _G_LOGGER_PID   = pid
        return _G_LOGGER

######################################################
#! EOF
######################################################
