"""Data transfer objects exposed by the container."""

from .snapshot import BeanInfo, ContainerSnapshot

__all__ = ["BeanInfo", "ContainerSnapshot"]
