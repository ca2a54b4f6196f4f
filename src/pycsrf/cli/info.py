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
"""'pycsrf info' — list backends, wire sizes and the configured identifiers."""

from __future__ import annotations

import click
from rich.table import Table

from pycsrf import __version__
from pycsrf.cli.console import console
from pycsrf.config.auto import CsrfAutoConfiguration
from pycsrf.core.config import Config
from pycsrf.kernel.exceptions import ConfigurationException
from pycsrf.protection import BACKENDS
from pycsrf.protection.aead import AeadCsrfProtection


@click.command()
@click.pass_obj
def info_command(config: Config) -> None:
    """Display the available protection backends and the configured names."""
    try:
        props = CsrfAutoConfiguration.properties(config)
    except ConfigurationException as exc:
        raise click.UsageError(str(exc)) from exc

    console.print(f"\n[pycsrf]pycsrf[/pycsrf] [dim]v{__version__}[/dim]\n")

    backends = Table(title="Backends", border_style="dim")
    backends.add_column("Backend", style="info")
    backends.add_column("Token bytes", justify="right")
    backends.add_column("Cookie bytes", justify="right")
    backends.add_column("Encrypted")
    backends.add_column("Selected")
    for name, backend in sorted(BACKENDS.items()):
        encrypted = issubclass(backend, AeadCsrfProtection)
        backends.add_row(
            name,
            str(backend.TOKEN_LENGTH),
            str(backend.COOKIE_LENGTH),
            "[success]yes[/success]" if encrypted else "[dim]no[/dim]",
            "*" if name == props.backend else "",
        )
    console.print(backends)

    names = Table(title="\nConfigured names", show_header=False, border_style="dim")
    names.add_column("Carrier", style="info")
    names.add_column("Name")
    names.add_row("Cookie", props.cookie_name)
    names.add_row("Form field", props.form_field)
    names.add_row("Header", props.header_name)
    names.add_row("Query parameter", props.query_param)
    console.print(names)
    console.print(f"[dim]Cookie lifetime: {props.ttl_seconds}s[/dim]\n")
