"""crux_di package

Minimal field-injection dependency injection container.

Purpose:
    Given a set of classes, instantiate one object per class and wire
    cross-references between them based solely on declared field
    annotations. Packaging is configured via the repository root
    ``pyproject.toml``.

Public API (re-exported):
    - Version: ``__version__``
    - Container: :class:`DIContainer`, :func:`build_container`
    - Exceptions: :class:`ContainerError` (alias :data:`BootstrapError`),
      :class:`ErrorCode`
    - Settings: :class:`ContainerSettings`, :func:`get_container_settings`
    - Diagnostics: :class:`ContainerSnapshot`, :class:`BeanInfo`
"""

from .base.dto import BeanInfo, ContainerSnapshot
from .base.errors import BootstrapError, ContainerError, ErrorCode
from .config import ContainerSettings, get_container_settings
from .di import DIContainer, build_container

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DIContainer",
    "build_container",
    "ContainerError",
    "BootstrapError",
    "ErrorCode",
    "ContainerSettings",
    "get_container_settings",
    "ContainerSnapshot",
    "BeanInfo",
]
