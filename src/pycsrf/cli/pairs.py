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
"""'pycsrf issue' and 'pycsrf verify' — issue and check token/cookie pairs."""

from __future__ import annotations

import click

from pycsrf.cli.console import console
from pycsrf.cli.options import backend_options, resolve
from pycsrf.core.config import Config
from pycsrf.kernel.exceptions import InternalError, ValidationFailure
from pycsrf.protection import decode_b64


@click.command()
@backend_options
@click.option("--ttl", type=int, default=None, help="Cookie lifetime in seconds (default: pycsrf.csrf.ttl_seconds).")
@click.option("--refresh", "refresh_token", default=None, help="Reuse the secret of this base64 token.")
@click.pass_obj
def issue_command(
    config: Config,
    backend: str | None,
    key: str | None,
    password: str | None,
    fast: bool,
    ttl: int | None,
    refresh_token: str | None,
) -> None:
    """Issue a token and cookie pair.

    Prints one ``name=value`` line each for the token (standard and
    URL-safe base64) and the cookie, then the cookie and header lines
    using the configured ``pycsrf.csrf.cookie_name`` and
    ``pycsrf.csrf.header_name``.
    """
    protection, props = resolve(config, backend, key, password, fast)
    ttl_seconds = ttl if ttl is not None else props.ttl_seconds

    previous_secret = None
    if refresh_token is not None:
        try:
            previous_secret = protection.parse_token(decode_b64(refresh_token)).secret
        except ValidationFailure as exc:
            raise click.BadParameter("token did not verify", param_hint="--refresh") from exc

    try:
        token, cookie = protection.generate_token_pair(previous_secret, ttl_seconds)
    except InternalError as exc:
        raise click.ClickException("could not draw random bytes for a new secret") from exc
    except ValidationFailure as exc:
        raise click.ClickException("could not encode the token pair") from exc
    click.echo(f"token={token.b64_string()}")
    click.echo(f"token_url={token.b64_url_string()}")
    click.echo(f"cookie={cookie.b64_string()}")
    click.echo(f"set_cookie={props.cookie_name}={cookie.b64_string()}")
    click.echo(f"header={props.header_name}: {token.b64_string()}")


@click.command()
@backend_options
@click.option("--token", required=True, help="Base64 token presented by the client.")
@click.option("--cookie", required=True, help="Base64 cookie presented by the client.")
@click.option("--url-safe", is_flag=True, default=False, help="The token uses the URL-safe alphabet.")
@click.pass_context
def verify_command(
    ctx: click.Context,
    backend: str | None,
    key: str | None,
    password: str | None,
    fast: bool,
    token: str,
    cookie: str,
    url_safe: bool,
) -> None:
    """Verify a token and cookie pair. Exits 1 when the pair is rejected."""
    protection, _ = resolve(ctx.obj, backend, key, password, fast)
    try:
        parsed_token = protection.parse_token(decode_b64(token, url_safe=url_safe))
        parsed_cookie = protection.parse_cookie(decode_b64(cookie))
        valid = protection.verify_token_pair(parsed_token, parsed_cookie)
    except ValidationFailure:
        valid = False

    if not valid:
        console.print("[error]invalid[/error]")
        ctx.exit(1)
    console.print("[success]valid[/success]")
