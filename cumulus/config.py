"""Configuration for cumulus"""

from dynaconf import Dynaconf, Validator

# Validators for Cumulus settings.
_validators = [
    Validator("logging.format", is_in=["mozlog", "pretty"]),
    Validator("logging.level", is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    Validator("logging.can_propagate", is_type_of=bool),
    Validator("metrics.dev_logger", is_type_of=bool),
    Validator("metrics.host", is_type_of=str),
    Validator("metrics.port", gte=0, is_type_of=int),
    Validator("weather.backend", is_in=["visualcrossing", "test"]),
    Validator("weather.cache", is_in=["redis", "none"]),
    # The Redis server URL is required when weather snapshots are cached in Redis.
    Validator(
        "redis.server",
        is_type_of=str,
        must_exist=True,
        when=Validator("weather.cache", must_exist=True, eq="redis"),
    ),
    Validator("redis.max_connections", is_type_of=int, gte=1),
    Validator("redis.socket_connect_timeout_sec", is_type_of=int, gte=0),
    Validator("redis.socket_timeout_sec", is_type_of=int, gte=0),
    Validator("weather.cache_ttl_sec", is_type_of=int, gte=0),
    # Upper bound the per-location upstream timeout so a slow provider can't hold a
    # batch open indefinitely.
    Validator("weather.query_timeout_sec", is_type_of=(int, float), gte=0, lte=10.0),
    Validator("visualcrossing.url_base", is_type_of=str, must_exist=True),
    Validator("visualcrossing.url_timeline_path", is_type_of=str, must_exist=True),
    # Snapshots are labelled in °C and km/h.
    Validator("visualcrossing.unit_group", is_in=["metric"]),
    Validator(
        "visualcrossing.api_key",
        is_type_of=str,
        must_exist=True,
        when=Validator("weather.backend", must_exist=True, eq="visualcrossing"),
    ),
    # The batch bound is part of the API contract, not a tuning knob.
    Validator("web.api.v1.max_locations", is_type_of=int, eq=10),
    Validator("web.api_key", is_type_of=str),
    Validator("sentry.env", is_in=["prod", "stage", "dev"]),
    Validator("sentry.mode", is_in=["disabled", "release", "debug"]),
    Validator("sentry.traces_sample_rate", gte=0, lte=1),
]

# `root_path` = The root path for Dynaconf, DO NOT CHANGE.
# `envvar_prefix` = Export envvars with `export CUMULUS_FOO=bar`.
# `settings_files` = Load these files in the order.
# `environments` = Enable layered environments such as `development`, `production`, `testing` etc.
# `env_switcher` = Switch environments by `export CUMULUS_ENV=production`. Default: `development`.
# `validators` = Define validators for Cumulus settings.

settings = Dynaconf(
    root_path="cumulus",
    envvar_prefix="CUMULUS",
    settings_files=[
        "configs/default.toml",
        "configs/development.toml",
        "configs/production.toml",
        "configs/ci.toml",
        "configs/testing.toml",
    ],
    environments=True,
    env_switcher="CUMULUS_ENV",
    validators=_validators,
)
