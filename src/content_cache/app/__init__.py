from .core.env import (
    ENV,
    IS_DEV,
    IS_LOCAL,
    IS_PROD,
    IS_TEST,
    Env,
    RenderMode,
    get_env,
    get_render_mode,
    is_long_lived_process,
)
from .core.logging import setup_logging

__all__ = [
    "ENV",
    "IS_DEV",
    "IS_LOCAL",
    "IS_PROD",
    "IS_TEST",
    "Env",
    "RenderMode",
    "get_env",
    "get_render_mode",
    "is_long_lived_process",
    "setup_logging",
]
