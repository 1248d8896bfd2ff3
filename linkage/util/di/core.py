"""Settings providers."""

from dishka import Scope, provide

from linkage.config import AuthSettings, DirectorySettings, Settings
from linkage.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Reads ``Settings`` once per container and hands out its sections."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_directory_settings(self, settings: Settings) -> DirectorySettings:
        return settings.directory
