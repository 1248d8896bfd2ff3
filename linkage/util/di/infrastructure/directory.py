"""Identity directory infrastructure providers."""

from dishka import Scope, provide

from linkage.adapter.directory import ManagementApiDirectory
from linkage.config import ConfigurationError, DirectorySettings
from linkage.domain.service import IdentityDirectory
from linkage.util.di.base import ProviderBase


class DirectoryProvider(ProviderBase):
    """Identity directory component base."""

    __mock_component__ = "directory"


class ProdDirectoryProvider(DirectoryProvider):
    """Production directory provider using the Management API."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_directory(
        self, directory_settings: DirectorySettings
    ) -> IdentityDirectory:
        """Provide Management API directory client.

        Raises:
            ConfigurationError: If the Management API token is not configured
        """
        if not directory_settings.api_token:
            raise ConfigurationError(
                "DIRECTORY__API_TOKEN must be set to use the Management API directory"
            )

        return ManagementApiDirectory(
            base_url=directory_settings.base_url,
            api_token=directory_settings.api_token,
            timeout=directory_settings.timeout,
        )
