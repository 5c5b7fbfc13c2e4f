# file        :   krylovspace/algebra/utils.py

'''
Configuration and dtype helpers for the linear algebra routines.

Every setting is read from the environment once, at import time, and written
back so that subprocesses inherit the resolved value.

Provides:
- Defaults for the Krylov iterations (`DEFAULT_TOL`, `DEFAULT_MAXITER`).
- The default floating point types (`PY_NP_FLOAT_TYPE`, `PY_NP_CPX_TYPE`).
- dtype helpers (`default_dtype`, `result_dtype`, `is_complex_dtype`).
- `get_logger` / `_log_message`, which route library messages to the global logger.
'''

import os
import logging
from typing import Type, Any

import numpy as np

# ---------------------------------------------------------------------
#! Enviroment variable names
# ---------------------------------------------------------------------

PY_FLOATING_POINT_STR   : str               = "PY_FLOATING_POINT"
PY_KRYLOV_TOL_STR       : str               = "PY_KRYLOV_TOL"
PY_KRYLOV_MAXITER_STR   : str               = "PY_KRYLOV_MAXITER"
PY_KRYLOV_VERBOSE_STR   : str               = "PY_KRYLOV_VERBOSE"

# ---------------------------------------------------------------------

DEFAULT_NP_FLOAT_TYPE   : Type              = np.float64
DEFAULT_NP_CPX_TYPE     : Type              = np.complex128

# ---------------------------------------------------------------------
#! SET VARIABLES
# ---------------------------------------------------------------------

PREFER_32BIT            : bool              = os.environ.get(PY_FLOATING_POINT_STR, "64bit").lower() in ["32bit", "32", "float32", "float"]
PY_FLOATING_POINT       : str               = "float32" if PREFER_32BIT else "float64"
os.environ[PY_FLOATING_POINT_STR]           = PY_FLOATING_POINT

PY_NP_FLOAT_TYPE        : Type              = np.float32 if PREFER_32BIT else DEFAULT_NP_FLOAT_TYPE
PY_NP_CPX_TYPE          : Type              = np.complex64 if PREFER_32BIT else DEFAULT_NP_CPX_TYPE

DEFAULT_TOL             : float             = float(os.environ.get(PY_KRYLOV_TOL_STR, "1e-7"))
os.environ[PY_KRYLOV_TOL_STR]               = repr(DEFAULT_TOL)

DEFAULT_MAXITER         : int               = int(os.environ.get(PY_KRYLOV_MAXITER_STR, "30"))
os.environ[PY_KRYLOV_MAXITER_STR]           = str(DEFAULT_MAXITER)

PY_KRYLOV_VERBOSE       : bool              = os.environ.get(PY_KRYLOV_VERBOSE_STR, "0") not in ["0", "", "false", "False"]

# ---------------------------------------------------------------------
#! Logging
# ---------------------------------------------------------------------

def get_logger():
    '''
    Global logger of the package. With PY_KRYLOV_VERBOSE set, debug messages
    of the iterations are shown as well.
    '''
    from ..common.flog import get_global_logger
    return get_global_logger(lvl = logging.DEBUG if PY_KRYLOV_VERBOSE else logging.INFO)

def _log_message(msg: str, lvl: int = 0, log: str = 'debug', **kwargs):
    """
    Logs a message using the global logger.

    Parameters:
        msg (str):
            The message to log.
        lvl (int):
            The indentation level for the message.
        log (str):
            Name of the Logger method to use ('debug', 'info', 'warning', 'error').
    """
    getattr(get_logger(), log)(msg, lvl=lvl, **kwargs)

# ---------------------------------------------------------------------
#! dtype helpers
# ---------------------------------------------------------------------

def default_dtype() -> np.dtype:
    ''' Real floating type chosen by PY_FLOATING_POINT. '''
    return np.dtype(PY_NP_FLOAT_TYPE)

def is_complex_dtype(dtype) -> bool:
    return np.issubdtype(np.dtype(dtype), np.complexfloating)

def result_dtype(*objs: Any) -> np.dtype:
    '''
    Common floating dtype of arrays, sparse matrices and linear operators.

    Objects without a `dtype` attribute are skipped. Integer inputs promote to
    the default floating type, so the result can always hold a normalised vector.
    '''
    dtypes = [np.dtype(o.dtype) for o in objs if getattr(o, 'dtype', None) is not None]
    return np.result_type(default_dtype(), *dtypes)

# ---------------------------------------------------------------------
#! EOF
# ---------------------------------------------------------------------
