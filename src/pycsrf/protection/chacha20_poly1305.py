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
"""ChaCha20-Poly1305 backend — encrypted and authenticated.

Uses the original ChaCha20-Poly1305 construction with an 8-byte nonce and a
64-bit block counter, so tokens are 104 bytes and cookies 112 bytes:

- the Poly1305 one-time key is the first 32 bytes of keystream block 0;
- the plaintext is encrypted starting at block 1;
- the tag covers ``aad || le64(len(aad)) || ciphertext || le64(len(ciphertext))``
  without padding, with empty ``aad``.

The RFC 8439 AEAD (``cryptography``'s ``ChaCha20Poly1305``) only takes
12-byte nonces, so the construction is assembled from the ChaCha20 stream
cipher and Poly1305 primitives.
"""

from __future__ import annotations

import struct

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms
from cryptography.hazmat.primitives.poly1305 import Poly1305

from pycsrf.protection.aead import AeadCsrfProtection

_LENGTH = struct.Struct("<Q")
_AAD = b""
_POLY1305_KEY_LENGTH = 32


class ChaCha20Poly1305CsrfProtection(AeadCsrfProtection):
    """Protects tokens and cookies with ChaCha20-Poly1305 (8-byte nonce)."""

    name = "chacha20-poly1305"
    NONCE_LENGTH = 8

    def _keystream(self, nonce: bytes, block: int) -> Cipher:
        # 16-byte ChaCha20 IV: 64-bit little-endian block counter, then the nonce.
        return Cipher(algorithms.ChaCha20(self._key, _LENGTH.pack(block) + nonce), mode=None)

    def _authenticator(self, nonce: bytes, ciphertext: bytes) -> Poly1305:
        poly_key = self._keystream(nonce, 0).encryptor().update(bytes(_POLY1305_KEY_LENGTH))
        mac = Poly1305(poly_key)
        mac.update(_AAD)
        mac.update(_LENGTH.pack(len(_AAD)))
        mac.update(ciphertext)
        mac.update(_LENGTH.pack(len(ciphertext)))
        return mac

    def _encrypt(self, nonce: bytes, plaintext: bytes) -> tuple[bytes, bytes]:
        ciphertext = self._keystream(nonce, 1).encryptor().update(plaintext)
        return ciphertext, self._authenticator(nonce, ciphertext).finalize()

    def _decrypt(self, nonce: bytes, ciphertext: bytes, tag: bytes) -> bytes:
        self._authenticator(nonce, ciphertext).verify(tag)
        return self._keystream(nonce, 1).decryptor().update(ciphertext)
