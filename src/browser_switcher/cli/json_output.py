"""JSON output utilities for CLI commands with machine-parseable output."""

import json
from typing import Any

from browser_switcher.cli.output import machine_output


def emit_json(data: dict[str, Any]) -> None:
    """Output JSON data to stdout for machine consumption.

    For Pydantic models, call model.model_dump(mode='json') before
    passing to this function.

    Args:
        data: Dictionary to serialize as JSON
    """
    machine_output(json.dumps(data, indent=2))
