"""Identity directory adapters."""

from .client import ManagementApiDirectory
from .memory import InMemoryDirectory

__all__ = ["InMemoryDirectory", "ManagementApiDirectory"]
