from article_votes.settings import Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("REDIS_URL", "ARTICLE_VOTES_REDIS_URL", "VOTE_WINDOW_SECONDS", "DERIVED_RANKING_TTL_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()
    assert settings.redis_url == "redis://localhost:6379/0"
    assert settings.vote_window_seconds == 7 * 24 * 60 * 60
    assert settings.derived_ranking_ttl_seconds == 60
    assert settings.default_ranking == "score"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://redis:6379/1")
    monkeypatch.setenv("DERIVED_RANKING_TTL_SECONDS", "120")

    settings = get_settings()
    assert settings.redis_url == "redis://redis:6379/1"
    assert settings.derived_ranking_ttl_seconds == 120
    assert get_settings() is settings
