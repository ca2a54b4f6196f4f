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
"""Shared wire handling for the AEAD backends.

Each encode draws a fresh nonce and 16 bytes of random padding. The padding
is discarded on decode. Plaintexts and wire formats, with ``N`` the
backend's nonce length::

    token plaintext  = padding(16) || secret(64)                -> 80 bytes
    cookie plaintext = padding(16) || expires(8) || secret(64)  -> 88 bytes
    wire             = ciphertext || nonce(N) || tag(16)

No associated data is used.
"""

from __future__ import annotations

import abc
from typing import ClassVar

from pycsrf.protection.layout import EXPIRES_LENGTH, Layout
from pycsrf.protection.port import CsrfProtection
from pycsrf.protection.types import SECRET_LENGTH

PADDING_LENGTH = 16
TAG_LENGTH = 16

TOKEN_PLAINTEXT = Layout("token plaintext", (("padding", PADDING_LENGTH), ("secret", SECRET_LENGTH)))
COOKIE_PLAINTEXT = Layout(
    "cookie plaintext",
    (("padding", PADDING_LENGTH), ("expires", EXPIRES_LENGTH), ("secret", SECRET_LENGTH)),
)


def wire_layout(name: str, plaintext: Layout, nonce_length: int) -> Layout:
    """Layout of ``ciphertext || nonce || tag`` for a given plaintext layout."""
    return Layout(
        name,
        (("ciphertext", plaintext.size), ("nonce", nonce_length), ("tag", TAG_LENGTH)),
    )


class AeadCsrfProtection(CsrfProtection):
    """Base for backends that encrypt and authenticate with an AEAD cipher.

    Subclasses set ``NONCE_LENGTH`` and implement :meth:`_encrypt` and
    :meth:`_decrypt`; the wire layouts and lengths are derived from it.
    """

    NONCE_LENGTH: ClassVar[int]
    TOKEN_WIRE: ClassVar[Layout]
    COOKIE_WIRE: ClassVar[Layout]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if "NONCE_LENGTH" in cls.__dict__:
            cls.TOKEN_WIRE = wire_layout(f"{cls.name} token", TOKEN_PLAINTEXT, cls.NONCE_LENGTH)
            cls.COOKIE_WIRE = wire_layout(f"{cls.name} cookie", COOKIE_PLAINTEXT, cls.NONCE_LENGTH)
            cls.TOKEN_LENGTH = cls.TOKEN_WIRE.size
            cls.COOKIE_LENGTH = cls.COOKIE_WIRE.size

    @abc.abstractmethod
    def _encrypt(self, nonce: bytes, plaintext: bytes) -> tuple[bytes, bytes]:
        """Return ``(ciphertext, tag)``."""
        ...

    @abc.abstractmethod
    def _decrypt(self, nonce: bytes, ciphertext: bytes, tag: bytes) -> bytes:
        """Return the plaintext. Raises ``InvalidTag`` if authentication fails."""
        ...

    def _seal(self, wire: Layout, plaintext: bytes) -> bytes:
        nonce = self.random_bytes(self.NONCE_LENGTH)
        ciphertext, tag = self._encrypt(nonce, plaintext)
        return wire.pack(ciphertext=ciphertext, nonce=nonce, tag=tag)

    def _open(self, wire: Layout, data: bytes) -> bytes:
        fields = wire.unpack(data)
        return self._decrypt(fields["nonce"], fields["ciphertext"], fields["tag"])

    def _seal_token(self, secret: bytes) -> bytes:
        plaintext = TOKEN_PLAINTEXT.pack(padding=self.random_bytes(PADDING_LENGTH), secret=secret)
        return self._seal(self.TOKEN_WIRE, plaintext)

    def _seal_cookie(self, secret: bytes, expires: bytes) -> bytes:
        plaintext = COOKIE_PLAINTEXT.pack(
            padding=self.random_bytes(PADDING_LENGTH),
            expires=expires,
            secret=secret,
        )
        return self._seal(self.COOKIE_WIRE, plaintext)

    def _open_token(self, data: bytes) -> bytes:
        return TOKEN_PLAINTEXT.unpack(self._open(self.TOKEN_WIRE, data))["secret"]

    def _open_cookie(self, data: bytes) -> tuple[bytes, bytes]:
        fields = COOKIE_PLAINTEXT.unpack(self._open(self.COOKIE_WIRE, data))
        return fields["secret"], fields["expires"]
