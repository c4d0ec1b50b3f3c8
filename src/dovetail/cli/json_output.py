"""JSON output utilities for CLI commands with machine-parseable output."""

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

import click
from pydantic import BaseModel, ConfigDict, Field

from dovetail.cli.output import machine_output

OUTPUT_FORMAT_KEY = "dovetail.output_format"


class ErrorResponse(BaseModel):
    """Pydantic model for error JSON responses.

    Attributes:
        error: Human-readable, possibly multi-line error message
        error_kind: Classified kind (e.g. "NotAuthenticated") or exception class name
        exit_code: Exit code for the process
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_kind: str
    exit_code: int = Field(default=1, ge=0, le=255)


def _serialize_for_json(obj: Any) -> Any:
    """Recursively serialize Paths and dataclass instances for JSON."""
    if isinstance(obj, Path):
        return str(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return _serialize_for_json(asdict(obj))
    if isinstance(obj, dict):
        return {key: _serialize_for_json(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize_for_json(item) for item in obj]
    return obj


def emit_json(data: Any) -> None:
    """Output JSON data to stdout for machine consumption."""
    machine_output(json.dumps(_serialize_for_json(data), indent=2))


def emit_json_error(error: str, error_kind: str, exit_code: int = 1) -> None:
    response = ErrorResponse(error=error, error_kind=error_kind, exit_code=exit_code)
    emit_json(response.model_dump(mode="json"))


def format_option(func: Any) -> Any:
    """Add --format text|json and record the choice for the error boundary.

    The choice is stored in ctx.meta, which is shared by the whole context
    chain, so the root group can emit errors in the same format.
    """

    def remember(ctx: click.Context, param: click.Parameter, value: str) -> str:
        ctx.meta[OUTPUT_FORMAT_KEY] = value
        return value

    return click.option(
        "--format",
        "output_format",
        type=click.Choice(["text", "json"]),
        default="text",
        show_default=True,
        callback=remember,
        help="Output format.",
    )(func)


def wants_json(ctx: click.Context) -> bool:
    return ctx.meta.get(OUTPUT_FORMAT_KEY) == "json"
