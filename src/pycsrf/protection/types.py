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
"""Wire value types for the double-submit cookie pattern.

``CsrfToken`` and ``CsrfCookie`` are the opaque, encoded values handed to
the client. ``UnencryptedCsrfToken`` and ``UnencryptedCsrfCookie`` are only
produced by a successful parse and must never be sent back to the client.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field

from pycsrf.kernel.exceptions import ValidationFailure

# ---------------------------------------------------------------------------
# Conventional collaborator identifiers
# ---------------------------------------------------------------------------
CSRF_COOKIE_NAME: str = "csrf"
"""Name of the cookie carrying the CSRF cookie value."""

CSRF_FORM_FIELD: str = "csrf-token"
"""Name of the hidden form field carrying the CSRF token."""

CSRF_HEADER: str = "X-CSRF-Token"
"""Name of the request header carrying the CSRF token."""

CSRF_QUERY_STRING: str = "csrf-token"
"""Name of the query parameter carrying the CSRF token."""

# ---------------------------------------------------------------------------
# Fixed sizes
# ---------------------------------------------------------------------------
SECRET_LENGTH: int = 64
"""Length in bytes of the secret shared by a token and its cookie."""

KEY_LENGTH: int = 32
"""Length in bytes of backend key material."""


@dataclass(frozen=True)
class CsrfToken:
    """A signed (and possibly encrypted) token, safe to show to end users."""

    value: bytes

    def b64_string(self) -> str:
        """The token as standard, padded base64."""
        return base64.b64encode(self.value).decode("ascii")

    def b64_url_string(self) -> str:
        """The token as URL-safe, padded base64."""
        return base64.urlsafe_b64encode(self.value).decode("ascii")

    def __len__(self) -> int:
        return len(self.value)


@dataclass(frozen=True)
class CsrfCookie:
    """A signed (and possibly encrypted) cookie value, safe to send to end users."""

    value: bytes

    def b64_string(self) -> str:
        """The cookie as standard, padded base64."""
        return base64.b64encode(self.value).decode("ascii")

    def __len__(self) -> int:
        return len(self.value)


@dataclass(frozen=True)
class UnencryptedCsrfToken:
    """A verified token. Holds the recovered secret."""

    secret: bytes = field(repr=False)


@dataclass(frozen=True)
class UnencryptedCsrfCookie:
    """A verified cookie. Holds the recovered secret and its expiry.

    Attributes:
        expires: Expiry as seconds since the Unix epoch.
        secret: The recovered 64-byte secret.
    """

    expires: int
    secret: bytes = field(repr=False)


def decode_b64(text: str | bytes, url_safe: bool = False) -> bytes:
    """Strictly decode a base64 token or cookie presented by a client.

    Args:
        text: The base64 text, standard or URL-safe alphabet, padded.
        url_safe: Decode with the URL-safe alphabet only; ``+`` and ``/``
            are rejected.

    Raises:
        ValidationFailure: If *text* is not valid base64.
    """
    try:
        raw = text.encode("ascii") if isinstance(text, str) else bytes(text)
        if url_safe:
            if b"+" in raw or b"/" in raw:
                raise ValidationFailure()
            raw = raw.translate(bytes.maketrans(b"-_", b"+/"))
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, UnicodeEncodeError, TypeError, ValueError) as exc:
        raise ValidationFailure() from exc
