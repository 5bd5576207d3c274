"""
Deployment environment lookup.

ENV alone decides which tier the onboarding API runs in. Local tiers get
detailed 500 bodies and wildcard CORS; production refuses SQLite and warns
about code previews. Results are cached for the life of the process.
"""
import os
from functools import lru_cache

DEFAULT_ENV = "dev"
LOCAL_ENVS = frozenset({"local", "dev"})
PRODUCTION_ENVS = frozenset({"prod", "production"})


@lru_cache(maxsize=1)
def get_env_name() -> str:
    """Lowercased ENV value, 'dev' when unset or blank."""
    return (os.getenv("ENV") or "").strip().lower() or DEFAULT_ENV


@lru_cache(maxsize=1)
def is_local_env() -> bool:
    return get_env_name() in LOCAL_ENVS


@lru_cache(maxsize=1)
def is_production_env() -> bool:
    return get_env_name() in PRODUCTION_ENVS


def clear_env_cache() -> None:
    """Forget cached lookups so a changed ENV is picked up (tests, reloads)."""
    for lookup in (get_env_name, is_local_env, is_production_env):
        lookup.cache_clear()
