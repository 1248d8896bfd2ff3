"""Infrastructure providers."""

# Import bases
from .directory import DirectoryProvider
from .persistence import ProdPersistenceProvider

# Import implementations (needed for __subclasses__())
from .directory import ProdDirectoryProvider  # noqa: F401

__all__ = [
    "DirectoryProvider",
    "ProdDirectoryProvider",
    "ProdPersistenceProvider",
]
