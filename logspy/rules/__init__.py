"""Built-in log rules."""

from .base import LogRule
from .error_without_exception import ErrorWithoutExceptionRule
from .exception_type import ExceptionTypeRule
from .forbidden_category import ForbiddenCategoryRule
from .max_level import MaxLogLevelRule
from .patterns import ForbiddenSubstringRule, RegexLogRule


__all__ = [
    "LogRule",
    "ErrorWithoutExceptionRule",
    "ExceptionTypeRule",
    "ForbiddenCategoryRule",
    "MaxLogLevelRule",
    "RegexLogRule",
    "ForbiddenSubstringRule",
]
