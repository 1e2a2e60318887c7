from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache
from typing import NamedTuple


class Env(StrEnum):
    LOCAL = "local"
    DEV   = "dev"
    TEST  = "test"
    PROD  = "prod"


class RenderMode(StrEnum):
    SERVER = "server"   # long-lived process serving requests
    STATIC = "static"   # build-time prerender, process exits afterwards


# Map common aliases -> canonical
SYNONYMS: dict[str, Env] = {
    "development": Env.DEV,
    "dev": Env.DEV,
    "local": Env.LOCAL,
    "test": Env.TEST,
    "preview": Env.TEST,
    "prod": Env.PROD,
    "production": Env.PROD,
}

RENDER_SYNONYMS: dict[str, RenderMode] = {
    "server": RenderMode.SERVER,
    "ssr": RenderMode.SERVER,
    "node": RenderMode.SERVER,
    "static": RenderMode.STATIC,
    "ssg": RenderMode.STATIC,
    "prerender": RenderMode.STATIC,
    "build": RenderMode.STATIC,
}


def _normalize(raw: str | None) -> Env | None:
    if not raw:
        return None
    val = raw.strip().lower()
    if val in (e.value for e in Env):
        return Env(val)  # exact match
    return SYNONYMS.get(val)


@cache
def get_env() -> Env:
    """
    Resolve the current environment once, with sensible fallbacks.

    Precedence:
      1) APP_ENV
      2) RAILWAY_ENVIRONMENT_NAME
      3) "local" (default)

    Unknown values fall back to LOCAL with a one-time warning.
    """
    raw = os.getenv("APP_ENV") or os.getenv("RAILWAY_ENVIRONMENT_NAME")
    env = _normalize(raw)
    if env is None:
        if raw:
            warnings.warn(
                f"Unrecognized environment '{raw}', defaulting to 'local'.",
                RuntimeWarning,
                stacklevel=2,
            )
        env = Env.LOCAL
    return env


@cache
def get_render_mode() -> RenderMode:
    """
    Resolve how this process renders pages, from RENDER_MODE.

    Static builds render once and exit, so nothing there should hold
    network connections open. Unknown values fall back to SERVER.
    """
    raw = os.getenv("RENDER_MODE")
    if not raw:
        return RenderMode.SERVER
    mode = RENDER_SYNONYMS.get(raw.strip().lower())
    if mode is None:
        warnings.warn(
            f"Unrecognized render mode '{raw}', defaulting to 'server'.",
            RuntimeWarning,
            stacklevel=2,
        )
        mode = RenderMode.SERVER
    return mode


def is_long_lived_process() -> bool:
    return get_render_mode() is RenderMode.SERVER


class EnvFlags(NamedTuple):
    env: Env
    is_local: bool
    is_dev: bool
    is_test: bool
    is_prod: bool


def get_env_flags(env: Env | None = None) -> EnvFlags:
    e = env or get_env()
    return EnvFlags(
        env=e,
        is_local=(e == Env.LOCAL),
        is_dev=(e == Env.DEV),
        is_test=(e == Env.TEST),
        is_prod=(e == Env.PROD),
    )


ENV: Env = get_env()
FLAGS: EnvFlags = get_env_flags(ENV)
IS_LOCAL, IS_DEV, IS_TEST, IS_PROD = FLAGS.is_local, FLAGS.is_dev, FLAGS.is_test, FLAGS.is_prod
