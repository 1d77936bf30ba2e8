"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_di.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .container_error import BootstrapError, ContainerError
from .classification import classify_exception

__all__ = ["ErrorCode", "ContainerError", "BootstrapError", "classify_exception"]
