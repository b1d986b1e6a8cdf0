"""
Resource wrapper for content that arrives in stages (loading, then data or error).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class ResourceStatus(Enum):
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Resource(Generic[T]):
    status: ResourceStatus
    data: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def loading(cls) -> "Resource[T]":
        return cls(ResourceStatus.LOADING)

    @classmethod
    def success(cls, data: T) -> "Resource[T]":
        return cls(ResourceStatus.SUCCESS, data=data)

    @classmethod
    def error(cls, message: str) -> "Resource[T]":
        return cls(ResourceStatus.ERROR, message=message)

    @property
    def is_loading(self) -> bool:
        return self.status == ResourceStatus.LOADING

    @property
    def is_success(self) -> bool:
        return self.status == ResourceStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status == ResourceStatus.ERROR
