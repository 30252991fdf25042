"""Service configuration.

Loads from config.yaml if present, with environment variable overrides.
Environment variables use the pattern: GLOBE_<SECTION>_<KEY> (uppercase).
The key-value store credentials keep the hosting platform's names
(KV_REST_API_URL / KV_REST_API_TOKEN) so a linked store works unchanged.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

# The visitor list never holds more than this many entries.
VISITOR_LIST_CAP = 200


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    env: str = "dev"  # "dev" or "prod"


@dataclass
class StoreConfig:
    url: str = ""
    token: str = ""
    list_key: str = "visitors-globe"
    max_entries: int = 200
    timeout_seconds: float = 5.0

    @property
    def configured(self) -> bool:
        """Both credentials are required before any store call is attempted."""
        return bool(self.url and self.token)


@dataclass
class GeoConfig:
    quantize_step: float = 2.5
    country_header: str = "x-vercel-ip-country"
    latitude_header: str = "x-vercel-ip-latitude"
    longitude_header: str = "x-vercel-ip-longitude"


@dataclass
class GlobeConfig:
    land_path: str = ""  # empty = bundled outline dataset
    max_points: int = 200
    tilt_deg: float = 25.0
    initial_speed: float = 1.5
    steady_speed: float = 0.02
    spin_ease_seconds: float = 8.0


@dataclass
class LoggingConfig:
    level: str = "info"
    format: str = "console"  # "console" or "json"


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    geo: GeoConfig = field(default_factory=GeoConfig)
    globe: GlobeConfig = field(default_factory=GlobeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = ("server", "store", "geo", "globe", "logging")


def _apply_env_overrides(config: AppConfig, environ: dict[str, str] | None = None) -> None:
    """Override config values from environment variables."""
    env = os.environ if environ is None else environ
    mapping = {
        "GLOBE_SERVER_HOST": lambda v: setattr(config.server, "host", v),
        "GLOBE_SERVER_PORT": lambda v: setattr(config.server, "port", int(v)),
        "GLOBE_SERVER_ENV": lambda v: setattr(config.server, "env", v),
        "KV_REST_API_URL": lambda v: setattr(config.store, "url", v),
        "KV_REST_API_TOKEN": lambda v: setattr(config.store, "token", v),
        "GLOBE_STORE_LIST_KEY": lambda v: setattr(config.store, "list_key", v),
        "GLOBE_STORE_MAX_ENTRIES": lambda v: setattr(config.store, "max_entries", int(v)),
        "GLOBE_STORE_TIMEOUT": lambda v: setattr(config.store, "timeout_seconds", float(v)),
        "GLOBE_GEO_QUANTIZE_STEP": lambda v: setattr(config.geo, "quantize_step", float(v)),
        "GLOBE_GEO_COUNTRY_HEADER": lambda v: setattr(config.geo, "country_header", v.lower()),
        "GLOBE_GEO_LATITUDE_HEADER": lambda v: setattr(config.geo, "latitude_header", v.lower()),
        "GLOBE_GEO_LONGITUDE_HEADER": lambda v: setattr(config.geo, "longitude_header", v.lower()),
        "GLOBE_GLOBE_LAND_PATH": lambda v: setattr(config.globe, "land_path", v),
        "GLOBE_LOG_LEVEL": lambda v: setattr(config.logging, "level", v),
        "GLOBE_LOG_FORMAT": lambda v: setattr(config.logging, "format", v),
    }
    for env_key, setter in mapping.items():
        val = env.get(env_key)
        if val is not None:
            setter(val)


def load_config(
    config_path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> AppConfig:
    """Load configuration from YAML file + environment overrides."""
    config = AppConfig()

    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}

        for name in _SECTIONS:
            section = getattr(config, name)
            for k, v in (raw.get(name) or {}).items():
                if hasattr(section, k) and k != "configured":
                    setattr(section, k, v)

    # Environment overrides always win
    _apply_env_overrides(config, environ)

    # Caps may be lowered, never raised
    config.store.max_entries = max(1, min(int(config.store.max_entries), VISITOR_LIST_CAP))
    config.globe.max_points = max(1, min(int(config.globe.max_points), VISITOR_LIST_CAP))
    return config
