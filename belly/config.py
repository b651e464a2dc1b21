"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_DB_PATH = "~/.config/belly/belly.db"
DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-5-20250929"


@dataclass
class DatabaseConfig:
    path: str = DEFAULT_DB_PATH


@dataclass
class InventoryConfig:
    expiring_window_days: int = 3
    cleanup_after_days: int = 7
    default_storage: str = "Refrigerator"


@dataclass
class RecipesConfig:
    max_results: int = 5
    catalog_path: str = ""  # empty: bundled catalog


@dataclass
class ClaudeVisionConfig:
    api_key: str = ""
    model: str = DEFAULT_CLAUDE_MODEL


@dataclass
class VisionConfig:
    backend: str = "mock"
    min_confidence: float = 0.5
    claude: ClaudeVisionConfig = field(default_factory=ClaudeVisionConfig)


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class BellyConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    recipes: RecipesConfig = field(default_factory=RecipesConfig)
    vision: VisionConfig = field(default_factory=VisionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> BellyConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The database path and API key can be supplied via environment variables
    when the file leaves them empty.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path).expanduser()
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    dbs = raw.get("database", {})
    inv = raw.get("inventory", {})
    rcp = raw.get("recipes", {})
    vis = raw.get("vision", {})
    lg = raw.get("logging", {})

    claude_cfg = vis.get("claude", {})

    # Resolve: config file → environment variable → default
    db_path = dbs.get("path", "") or os.environ.get("BELLY_DB_PATH", "") or DEFAULT_DB_PATH
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )

    return BellyConfig(
        database=DatabaseConfig(path=db_path),
        inventory=InventoryConfig(
            expiring_window_days=inv.get("expiring_window_days", 3),
            cleanup_after_days=inv.get("cleanup_after_days", 7),
            default_storage=inv.get("default_storage", "Refrigerator"),
        ),
        recipes=RecipesConfig(
            max_results=rcp.get("max_results", 5),
            catalog_path=rcp.get("catalog_path", ""),
        ),
        vision=VisionConfig(
            backend=vis.get("backend", "mock"),
            min_confidence=vis.get("min_confidence", 0.5),
            claude=ClaudeVisionConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", DEFAULT_CLAUDE_MODEL),
            ),
        ),
        logging=LoggingConfig(level=lg.get("level", "WARNING")),
    )
