"""Config loading: defaults, profile overlay."""

from predfeed.config.settings import Settings, get_settings


def test_defaults_without_config(tmp_path):
    settings = get_settings(config_dir=tmp_path)
    assert settings.dome_base_url == "https://api.domeapi.io/v1"
    assert settings.cache_ttl_sec == 30.0
    assert settings.timeout_sec == 10.0
    assert settings.logging_level == "INFO"
    assert settings.logging_format == "console"


def test_profile_overlay_merges(tmp_path):
    (tmp_path / "default.toml").write_text(
        '[dome]\nbase_url = "https://a.test/v1"\ncache_ttl_sec = 30\n\n[logging]\nlevel = "info"\n'
    )
    (tmp_path / "fast.toml").write_text("[dome]\ncache_ttl_sec = 2\n")
    settings = get_settings("fast", config_dir=tmp_path)
    assert settings.dome_base_url == "https://a.test/v1"
    assert settings.cache_ttl_sec == 2.0
    assert settings.logging_level == "INFO"


def test_from_dict_ignores_unknown_sections():
    settings = Settings.from_dict({"dome": {"timeout_sec": "3.5"}, "other": {}})
    assert settings.timeout_sec == 3.5
    assert settings.logging == {}
