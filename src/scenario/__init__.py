"""
scenario - Option and Result types for Python.

    >>> from scenario import Option, Result
    >>> Option.from_value(0).map(lambda n: n + 1).value_or(-1)
    1
    >>> Result.failure("E_TIMEOUT").recover(lambda code: "cached").value_or("none")
    'cached'
"""

from scenario.core import *  # noqa: F403
from scenario.core import __all__ as _core_all

__version__ = "0.6.2"

__all__ = [*_core_all, "__version__"]
