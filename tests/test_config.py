"""Tests for config loading."""

from belly.config import DEFAULT_DB_PATH, BellyConfig, load_config


def test_load_config_defaults(monkeypatch):
    """Loading with no path returns all defaults."""
    monkeypatch.delenv("BELLY_DB_PATH", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    config = load_config()
    assert isinstance(config, BellyConfig)
    assert config.database.path == DEFAULT_DB_PATH
    assert config.inventory.expiring_window_days == 3
    assert config.inventory.cleanup_after_days == 7
    assert config.inventory.default_storage == "Refrigerator"
    assert config.recipes.max_results == 5
    assert config.recipes.catalog_path == ""
    assert config.vision.backend == "mock"
    assert config.vision.min_confidence == 0.5
    assert config.vision.claude.api_key == ""
    assert config.logging.level == "WARNING"


def test_load_config_nonexistent_file():
    """Loading a nonexistent file returns defaults."""
    config = load_config("/nonexistent/path.toml")
    assert config.vision.backend == "mock"


def test_load_config_from_toml(tmp_path):
    """Loading a valid TOML file populates config."""
    path = tmp_path / "config.toml"
    path.write_text(
        """\
[database]
path = "/var/lib/belly/belly.db"

[inventory]
expiring_window_days = 5
cleanup_after_days = 14
default_storage = "Pantry"

[recipes]
max_results = 3
catalog_path = "/etc/belly/recipes.toml"

[vision]
backend = "claude"
min_confidence = 0.7

[vision.claude]
api_key = "test-key-123"
model = "claude-test"

[logging]
level = "DEBUG"
""",
        encoding="utf-8",
    )
    config = load_config(path)

    assert config.database.path == "/var/lib/belly/belly.db"
    assert config.inventory.expiring_window_days == 5
    assert config.inventory.cleanup_after_days == 14
    assert config.inventory.default_storage == "Pantry"
    assert config.recipes.max_results == 3
    assert config.recipes.catalog_path == "/etc/belly/recipes.toml"
    assert config.vision.backend == "claude"
    assert config.vision.min_confidence == 0.7
    assert config.vision.claude.api_key == "test-key-123"
    assert config.vision.claude.model == "claude-test"
    assert config.logging.level == "DEBUG"


def test_load_config_partial_toml(tmp_path):
    """Sections missing from the file keep their defaults."""
    path = tmp_path / "config.toml"
    path.write_text("[recipes]\nmax_results = 2\n", encoding="utf-8")
    config = load_config(path)
    assert config.recipes.max_results == 2
    assert config.inventory.expiring_window_days == 3
    assert config.vision.backend == "mock"


def test_env_fallback(monkeypatch):
    """Environment variables fill values the file leaves empty."""
    monkeypatch.setenv("BELLY_DB_PATH", "/tmp/env.db")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")

    config = load_config()
    assert config.database.path == "/tmp/env.db"
    assert config.vision.claude.api_key == "env-key"


def test_file_wins_over_env(tmp_path, monkeypatch):
    """Values set in the file take precedence over the environment."""
    monkeypatch.setenv("BELLY_DB_PATH", "/tmp/env.db")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
    path = tmp_path / "config.toml"
    path.write_text(
        '[database]\npath = "/tmp/file.db"\n\n[vision.claude]\napi_key = "file-key"\n',
        encoding="utf-8",
    )

    config = load_config(path)
    assert config.database.path == "/tmp/file.db"
    assert config.vision.claude.api_key == "file-key"
