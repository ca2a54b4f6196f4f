# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""pycsrf CLI — derive keys, issue and verify CSRF token pairs."""

from __future__ import annotations

from pathlib import Path

import click

from pycsrf.core.config import Config
from pycsrf.logging.structlog_adapter import StructlogAdapter

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.version_option(package_name="pycsrf")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory holding pycsrf.yaml / pycsrf.toml.",
)
@click.option("--profile", "profiles", multiple=True, help="Active configuration profile (repeatable).")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    help="Root log level.",
)
@click.pass_context
def cli(ctx: click.Context, config_dir: Path, profiles: tuple[str, ...], log_level: str) -> None:
    """pycsrf — double-submit cookie CSRF protection tooling."""
    config = Config.from_sources(config_dir, active_profiles=list(profiles))
    StructlogAdapter().configure(config.merged({"pycsrf": {"logging": {"level": {"root": log_level.upper()}}}}))
    ctx.obj = config


from pycsrf.cli.info import info_command  # noqa: E402
from pycsrf.cli.keys import derive_key_command  # noqa: E402
from pycsrf.cli.pairs import issue_command, verify_command  # noqa: E402

cli.add_command(derive_key_command, name="derive-key")
cli.add_command(issue_command, name="issue")
cli.add_command(verify_command, name="verify")
cli.add_command(info_command, name="info")
