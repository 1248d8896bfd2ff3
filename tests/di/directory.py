"""Mock directory providers for testing."""

from dishka import Scope, provide

from linkage.adapter.directory import InMemoryDirectory
from linkage.domain.service import IdentityDirectory
from linkage.util.di.infrastructure.directory import DirectoryProvider


class MockDirectoryProvider(DirectoryProvider):
    """Mock directory provider using the in-memory directory.

    APP-scoped so that users seeded by a test are visible to every request
    made through the same container.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_identity_directory(self) -> IdentityDirectory:
        """Provide in-memory identity directory."""
        return InMemoryDirectory()
