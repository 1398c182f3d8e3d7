"""Unit tests for Settings loading."""

from engage.config import AuthSettings, Settings
from engage.domain.value import RefilePolicy


def test_nested_sections_read_from_environment(monkeypatch):
    monkeypatch.setenv("MODERATION__FLAG_THRESHOLD", "3")
    monkeypatch.setenv("MODERATION__REFILE_POLICY", "while_pending")
    monkeypatch.setenv("MODERATION__HIGH_FLAG_COUNT", "10")
    monkeypatch.setenv("ANALYTICS__RECENT_DAYS", "30")

    settings = Settings(_env_file=None)

    assert settings.moderation.flag_threshold == 3
    assert settings.moderation.refile_policy == RefilePolicy.WHILE_PENDING
    assert settings.moderation.high_flag_count == 10
    assert settings.analytics.recent_days == 30
    assert settings.analytics.view_cooldown_minutes == 60


def test_auth_settings_only_cover_token_verification():
    """The cookie name is fixed by the routes, not configured."""
    assert set(AuthSettings.model_fields) == {
        "jwt_secret",
        "jwt_algorithm",
        "jwt_expiry_days",
    }
