"""Unified container error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``crux_di.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.container_error import BootstrapError, ContainerError
from .errors_parts.classification import classify_exception

__all__ = ["ErrorCode", "ContainerError", "BootstrapError", "classify_exception"]
