"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from engage.config import AnalyticsSettings, AuthSettings, ModerationSettings, Settings
from engage.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_moderation_settings(self, settings: Settings) -> ModerationSettings:
        """Provide moderation settings."""
        return settings.moderation

    @provide(scope=Scope.APP)
    def provide_analytics_settings(self, settings: Settings) -> AnalyticsSettings:
        """Provide analytics settings."""
        return settings.analytics
