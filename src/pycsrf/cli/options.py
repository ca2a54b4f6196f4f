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
"""Options shared by the commands that need a protection backend."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from pycsrf.config.auto import CsrfAutoConfiguration
from pycsrf.config.properties.csrf import CsrfProperties
from pycsrf.core.config import Config
from pycsrf.kernel.exceptions import ConfigurationException
from pycsrf.protection import BACKENDS, CsrfProtection

F = Callable[..., Any]


def backend_options(func: F) -> F:
    """Add --backend, --key, --password and --fast to a command."""
    func = click.option(
        "--fast",
        is_flag=True,
        default=False,
        help="Use the cheap scrypt cost with --password. Testing only.",
    )(func)
    func = click.option("--password", default=None, help="Derive key material from this password.")(func)
    func = click.option("--key", default=None, help="Base64-encoded 32-byte key material.")(func)
    func = click.option(
        "--backend",
        type=click.Choice(sorted(BACKENDS)),
        default=None,
        help="Protection backend (default: pycsrf.csrf.backend).",
    )(func)
    return func


def resolve(
    config: Config,
    backend: str | None,
    key: str | None,
    password: str | None,
    fast: bool,
) -> tuple[CsrfProtection, CsrfProperties]:
    """Apply command-line overrides to *config* and build the backend."""
    overrides: dict[str, Any] = {}
    if backend is not None:
        overrides["backend"] = backend
    if key is not None:
        overrides["key"] = key
    elif password is not None:
        overrides["key"] = None
    if password is not None:
        overrides["password"] = password
    if fast:
        overrides["kdf_profile"] = "fast"

    merged = config.merged({"pycsrf": {"csrf": overrides}})
    try:
        return CsrfAutoConfiguration.protection(merged), CsrfAutoConfiguration.properties(merged)
    except ConfigurationException as exc:
        raise click.UsageError(str(exc)) from exc
