"""
Scenario core - Option and Result types plus their supporting stack.

Modules:
    absence     UNSET sentinel, is_absent(), clone()
    option      Option / Present / Absent
    result      Result / Success / Failure, collect/partition helpers
    errors      ScenarioError hierarchy and signal-handler helpers
    logging     structlog configuration
    settings    pydantic-settings configuration
"""

from scenario.core.absence import UNSET, Unset, clone, is_absent
from scenario.core.errors import (
    AbsentValueError,
    ErrorCategory,
    FailureValueError,
    ScenarioError,
    SignalHandlerReturnedError,
    raise_error,
)
from scenario.core.option import Absent, Option, Present, from_fallible, from_value, none, some
from scenario.core.result import (
    Failure,
    Result,
    Success,
    collect_results,
    failure,
    partition_results,
    success,
)
from scenario.core.settings import ScenarioSettings, get_settings

__all__ = [
    # Absence
    "UNSET",
    "Unset",
    "clone",
    "is_absent",
    # Option
    "Option",
    "Present",
    "Absent",
    "some",
    "none",
    "from_value",
    "from_fallible",
    # Result
    "Result",
    "Success",
    "Failure",
    "success",
    "failure",
    "collect_results",
    "partition_results",
    # Errors
    "ErrorCategory",
    "ScenarioError",
    "AbsentValueError",
    "FailureValueError",
    "SignalHandlerReturnedError",
    "raise_error",
    # Settings
    "ScenarioSettings",
    "get_settings",
]
