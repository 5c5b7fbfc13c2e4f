"""
Common utilities shared by the krylovspace subpackages.

**Logging and Monitoring:**
- Logger with indentation levels, optional colours and optional file output
- Per-process global logger

Example:
    >>> from krylovspace.common import get_global_logger
    >>> logger = get_global_logger()
    >>> logger.info("hello")
"""

import  importlib
from    typing import TYPE_CHECKING

# For static type checking (IDE support) without runtime import
if TYPE_CHECKING:
    from .flog          import Logger, Colors, get_global_logger

# Lazy loading registry
_LAZY_IMPORTS = {
    'Logger'                    : ('.flog', 'Logger'),
    'Colors'                    : ('.flog', 'Colors'),
    'get_global_logger'         : ('.flog', 'get_global_logger'),
}

# Cache for loaded attributes
_LOADED = {}

def __getattr__(name: str):
    """Lazy import handler - loads modules only when accessed."""
    if name in _LAZY_IMPORTS:
        if name not in _LOADED:
            module_path, attr_name  = _LAZY_IMPORTS[name]
            module                  = importlib.import_module(module_path, package=__name__)
            _LOADED[name]           = getattr(module, attr_name)
        return _LOADED[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__():
    return list(_LAZY_IMPORTS.keys())

__all__ = list(_LAZY_IMPORTS.keys())

####################################################################################################
#! EOF
####################################################################################################
