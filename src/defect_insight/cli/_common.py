"""Shared CLI helpers."""

from typing import Any

import typer
from rich.console import Console

from ..config import DetectorConfig
from ..identity import StaticIdentity
from ..persistence import ResultStore

console = Console()

# Status lines that must not mix with JSON/CSV on stdout
err_console = Console(stderr=True)


def get_config(ctx: typer.Context) -> DetectorConfig:
    """Config resolved by the main callback."""
    obj = ctx.obj or {}
    config = obj.get("config")
    if config is None:
        config = DetectorConfig()
    return config


def get_identity(ctx: typer.Context) -> StaticIdentity:
    return StaticIdentity(get_config(ctx).user)


def get_store(ctx: typer.Context) -> ResultStore:
    return ResultStore(get_config(ctx).db_path)


def parse_metric_options(values: list[str]) -> dict[str, Any]:
    """Turn repeated ``--metric key=value`` options into a raw row."""
    raw: dict[str, Any] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--metric")
        raw[key.strip()] = value.strip()
    return raw
