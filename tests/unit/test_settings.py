from typing import Any

from matchlens.config.settings import Settings, get_settings, settings


def test_defaults(monkeypatch: Any) -> None:
    for var in ("DDRAGON_VERSION_WINDOW", "ITEM_CATALOG_TTL_SECONDS", "ANALYSIS_MAX_MATCHES"):
        monkeypatch.delenv(var, raising=False)
    cfg = Settings(_env_file=None)

    assert cfg.ddragon_version_window == 3
    assert cfg.item_catalog_ttl_seconds == 86400
    assert cfg.analysis_max_matches == 100
    assert cfg.ddragon_base_url.startswith("https://")


def test_environment_overrides(monkeypatch: Any) -> None:
    monkeypatch.setenv("ANALYSIS_MAX_WORKERS", "8")
    monkeypatch.setenv("APP_ENV", "production")
    cfg = Settings(_env_file=None)

    assert cfg.analysis_max_workers == 8
    assert cfg.is_production
    assert not cfg.is_development


def test_dotenv_takes_precedence_over_environment(tmp_path: Any, monkeypatch: Any) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("DDRAGON_LOCALE=ko_KR\n", encoding="utf-8")
    monkeypatch.setenv("DDRAGON_LOCALE", "de_DE")

    cfg = Settings(_env_file=env_file)
    assert cfg.ddragon_locale == "ko_KR"


def test_get_settings_returns_global_instance() -> None:
    assert get_settings() is settings
