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
"""'pycsrf derive-key' — derive base64 key material from a password."""

from __future__ import annotations

import base64

import click

from pycsrf.protection import FAST_PARAMS, PRODUCTION_PARAMS, derive_key


@click.command()
@click.option("--password", prompt=True, hide_input=True, help="Password to derive the key from.")
@click.option("--fast", is_flag=True, default=False, help="Use the cheap scrypt cost. Testing only.")
def derive_key_command(password: str, fast: bool) -> None:
    """Derive 32 bytes of key material with scrypt and print them as base64."""
    key = derive_key(password, FAST_PARAMS if fast else PRODUCTION_PARAMS)
    click.echo(base64.b64encode(key).decode("ascii"))
