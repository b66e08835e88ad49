"""Configuration for linkmark"""

import pathlib

from dynaconf import Dynaconf, Validator

# Validators for linkmark settings.
_validators = [
    Validator("deployment.canary", is_type_of=bool),
    Validator("logging.format", is_in=["mozlog", "pretty"]),
    Validator("logging.level", is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    Validator("logging.can_propagate", is_type_of=bool),
    Validator("metrics.dev_logger", is_type_of=bool),
    Validator("metrics.host", is_type_of=str),
    Validator("metrics.port", gte=0, is_type_of=int),
    Validator("icons.page_timeout_sec", is_type_of=float, gt=0, lte=30.0, must_exist=True),
    # Checks are speculative, keep them short so a dead origin cannot stall a resolution.
    Validator("icons.check_timeout_sec", is_type_of=float, gt=0, lte=10.0, must_exist=True),
    # 0 disables the overall deadline.
    Validator("icons.resolve_timeout_sec", is_type_of=float, gte=0, must_exist=True),
    Validator("icons.max_redirects", is_type_of=int, gte=0, lte=10, must_exist=True),
    Validator("icons.max_connections", is_type_of=int, gte=1, must_exist=True),
    Validator("icons.max_concurrent_resolutions", is_type_of=int, gte=1, must_exist=True),
    Validator("icons.fallback_paths_enabled", is_type_of=bool, must_exist=True),
    Validator("icons.cache", is_in=["redis", "none"], must_exist=True),
    # Redis rejects a zero expiry, so every cached icon must expire.
    Validator("icons.cache_ttl_sec", is_type_of=int, gt=0, must_exist=True),
    Validator("icons.max_page_bytes", is_type_of=int, gte=1024, must_exist=True),
    # The Redis server URL is required when icon results are cached in Redis.
    Validator(
        "redis.server",
        is_type_of=str,
        must_exist=True,
        when=Validator("icons.cache", must_exist=True, eq="redis"),
    ),
    Validator("redis.max_connections", is_type_of=int, gte=1),
    Validator("redis.socket_connect_timeout_sec", is_type_of=int, gte=1),
    Validator("redis.socket_timeout_sec", is_type_of=int, gte=1),
    Validator("web.api.v1.url_character_max", is_type_of=int, gt=10, lte=4096),
    Validator("web.api.v1.title_character_max", is_type_of=int, gt=0, lte=1024),
    Validator("sentry.env", is_in=["prod", "stage", "dev"]),
    Validator("sentry.mode", is_in=["disabled", "release", "debug"]),
    Validator("sentry.traces_sample_rate", gte=0, lte=1),
]

# `root_path` = The directory holding the settings files below.
# `envvar_prefix` = Export envvars with `export LINKMARK_FOO=bar`.
# `settings_files` = Load these files in the order.
# `environments` = Enable layered environments such as `development`, `production`, `testing` etc.
# `env_switcher` = Switch environments by `export LINKMARK_ENV=production`. Default: `development`.
# `merge_enabled` = Merge the tables of an environment into the `default` ones instead of
#   replacing them, e.g. `[production.icons]` only overrides the keys it sets.
# `validators` = Define validators for linkmark settings.


def create_settings() -> Dynaconf:
    """Load the settings of the environment selected by `LINKMARK_ENV`."""
    return Dynaconf(
        root_path=str(pathlib.Path(__file__).parent),
        envvar_prefix="LINKMARK",
        settings_files=[
            "default.toml",
            "development.toml",
            "production.toml",
            "testing.toml",
        ],
        environments=True,
        env_switcher="LINKMARK_ENV",
        merge_enabled=True,
        validators=_validators,
    )


settings = create_settings()
