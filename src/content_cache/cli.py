from __future__ import annotations

import asyncio
import json
from datetime import datetime
from typing import Any

import typer

from content_cache.app.core.logging import setup_logging
from content_cache.cache.accessor import CacheAccessor, get_cache_accessor
from content_cache.cache.result import Hit, Unavailable

app = typer.Typer(no_args_is_help=True, add_completion=False, help="Inspect and invalidate the content cache.")


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _run(coro_fn) -> Any:
    async def runner():
        accessor = get_cache_accessor()
        try:
            if await accessor.client.acquire() is None:
                reason = accessor.client.disabled_reason
                if reason is None:
                    typer.echo("Cache is unavailable (Redis client could not be created).", err=True)
                    raise typer.Exit(code=1)
                typer.echo(f"Cache is disabled ({reason}); nothing to do.")
                return None
            return await coro_fn(accessor)
        finally:
            await accessor.client.close()

    return asyncio.run(runner())


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log cache operations")):
    if verbose:
        setup_logging()


@app.command("invalidate")
def invalidate(pattern: str = typer.Argument(..., help='Glob pattern, e.g. "movies:*"')):
    """Delete every cached key matching PATTERN."""

    async def go(accessor: CacheAccessor):
        deleted = await accessor.invalidate_by_pattern(pattern)
        typer.echo(f"Deleted {deleted} key(s) matching {pattern}")

    _run(go)


@app.command("delete")
def delete(key: str = typer.Argument(..., help="Exact cache key")):
    """Delete a single cached key."""

    async def go(accessor: CacheAccessor):
        if await accessor.remove(key):
            typer.echo(f"Deleted {key}")
        else:
            typer.echo(f"Could not delete {key}", err=True)
            raise typer.Exit(code=1)

    _run(go)


@app.command("show")
def show(key: str = typer.Argument(..., help="Exact cache key")):
    """Print the decoded value cached under KEY, or "miss"."""

    async def go(accessor: CacheAccessor):
        result = await accessor.lookup(key)
        if isinstance(result, Hit):
            typer.echo(json.dumps(result.value, indent=2, default=_json_default, ensure_ascii=False))
        elif isinstance(result, Unavailable):
            typer.echo(f"unavailable ({result.reason})", err=True)
            raise typer.Exit(code=1)
        else:
            typer.echo("miss")

    _run(go)


if __name__ == "__main__":
    app()
