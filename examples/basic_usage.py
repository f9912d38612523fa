#!/usr/bin/env python3
"""Programmatic task execution example.

This demonstrates using the framework components directly:

* load settings from `.env` / environment variables
* register the built-in tasks on a runtime
* execute a task by name and print the JSON-ready result

The `prompt-completion` task is only available when provider credentials are
configured (e.g. `INTELLIGENCE_LLM_GATEWAY_API_KEY`).
"""

from __future__ import annotations

import argparse
import json
from typing import Sequence

from prism_intelligence import IntelligenceConfig, IntelligenceRuntime


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Execute a registered task (programmatic example).")
    parser.add_argument("--task", default="example-task", help="Registered task name")
    parser.add_argument("--prompt", required=True, help="Prompt passed as task input")
    parser.add_argument("--model", default=None, help="Model id override (optional)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Wall-clock budget in seconds (optional)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    runtime = IntelligenceRuntime(IntelligenceConfig())
    runtime.register_defaults()

    for info in runtime.registry.list_tasks():
        print(f"Registered: {info.name} - {info.description}")

    result = runtime.execute(
        args.task,
        {"prompt": args.prompt},
        {"model": args.model},
        timeout_s=args.timeout,
    )

    print(json.dumps(result.to_json(), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
