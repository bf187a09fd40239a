# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Main CLI entry point for promdump."""

################################################################################
# NOTE: Keep the imports here to a minimum. This file is read every time
# the CLI is run, including to generate the help text.
################################################################################

from typing import Annotated

from cyclopts import App, Parameter

from promdump.cli_utils import exit_on_error
from promdump.common.config import DumpConfig, MetricsConfig

app = App(name="promdump", help="Dumps data from Prometheus to stdout")


@app.command(name="dump")
def dump(
    *queries: str,
    config: Annotated[DumpConfig, Parameter(name="*")],
) -> None:
    """Run every query against every source and dump the result.

    Args:
        queries: PromQL expressions to evaluate over the time window.
        config: Dump options.
    """
    with exit_on_error(title="Error Running Dump"):
        from promdump.common.logging import setup_rich_logging
        from promdump.dump_runner import run_dump

        setup_rich_logging(config.log_level)
        run_dump(config, list(queries))


@app.command(name="metrics")
def metrics(config: Annotated[MetricsConfig, Parameter(name="*")]) -> None:
    """List the metrics of a source with their help text and label names, as JSON.

    Args:
        config: Metrics options.
    """
    with exit_on_error(title="Error Listing Metrics"):
        from promdump.common.logging import setup_rich_logging
        from promdump.dump_runner import run_metrics

        setup_rich_logging(config.log_level)
        run_metrics(config)


@app.command(name="version")
def version() -> None:
    """Print the version."""
    from promdump import __version__

    print(__version__)
