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
"""HMAC-SHA-256 backend — authenticated, not encrypted.

The secret travels in the clear; the MAC only makes it unforgeable.

Wire formats::

    token  = secret(64) || HMAC(secret)(32)                      -> 96 bytes
    cookie = secret(64) || expires(8) || HMAC(secret||expires)(32) -> 104 bytes
"""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.hmac import HMAC

from pycsrf.protection.layout import EXPIRES_LENGTH, Layout
from pycsrf.protection.port import CsrfProtection
from pycsrf.protection.types import SECRET_LENGTH

MAC_LENGTH = 32

TOKEN_LAYOUT = Layout("hmac token", (("secret", SECRET_LENGTH), ("mac", MAC_LENGTH)))
COOKIE_LAYOUT = Layout(
    "hmac cookie",
    (("secret", SECRET_LENGTH), ("expires", EXPIRES_LENGTH), ("mac", MAC_LENGTH)),
)


class HmacCsrfProtection(CsrfProtection):
    """Protects tokens and cookies with HMAC-SHA-256."""

    name = "hmac"
    TOKEN_LENGTH = TOKEN_LAYOUT.size
    COOKIE_LENGTH = COOKIE_LAYOUT.size

    def _hmac(self, *parts: bytes) -> HMAC:
        mac = HMAC(self._key, hashes.SHA256())
        for part in parts:
            mac.update(part)
        return mac

    def _seal_token(self, secret: bytes) -> bytes:
        return TOKEN_LAYOUT.pack(secret=secret, mac=self._hmac(secret).finalize())

    def _seal_cookie(self, secret: bytes, expires: bytes) -> bytes:
        mac = self._hmac(secret, expires).finalize()
        return COOKIE_LAYOUT.pack(secret=secret, expires=expires, mac=mac)

    def _open_token(self, data: bytes) -> bytes:
        fields = TOKEN_LAYOUT.unpack(data)
        self._hmac(fields["secret"]).verify(fields["mac"])
        return fields["secret"]

    def _open_cookie(self, data: bytes) -> tuple[bytes, bytes]:
        fields = COOKIE_LAYOUT.unpack(data)
        self._hmac(fields["secret"], fields["expires"]).verify(fields["mac"])
        return fields["secret"], fields["expires"]
