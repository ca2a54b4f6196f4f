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
"""AES-256-GCM backend — encrypted and authenticated.

Uses a 12-byte nonce: tokens are 108 bytes, cookies 116 bytes.
"""

from __future__ import annotations

from typing import Any

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from pycsrf.protection.aead import TAG_LENGTH, AeadCsrfProtection


class AesGcmCsrfProtection(AeadCsrfProtection):
    """Protects tokens and cookies with AES-256-GCM."""

    name = "aes-gcm"
    NONCE_LENGTH = 12

    def __init__(self, key: bytes, **kwargs: Any) -> None:
        super().__init__(key, **kwargs)
        self._aead = AESGCM(self._key)

    def _encrypt(self, nonce: bytes, plaintext: bytes) -> tuple[bytes, bytes]:
        sealed = self._aead.encrypt(nonce, plaintext, None)
        return sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]

    def _decrypt(self, nonce: bytes, ciphertext: bytes, tag: bytes) -> bytes:
        return self._aead.decrypt(nonce, ciphertext + tag, None)
