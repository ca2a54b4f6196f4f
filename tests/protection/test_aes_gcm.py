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
"""Tests for the AES-256-GCM backend wire format."""

from __future__ import annotations

import os
import struct

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from pycsrf.kernel.exceptions import ValidationFailure
from pycsrf.protection.aes_gcm import AesGcmCsrfProtection

KEY = os.urandom(32)
SECRET = bytes(range(64))
NOW = 1_700_000_000


@pytest.fixture
def protection():
    return AesGcmCsrfProtection.from_key(KEY, clock=lambda: NOW)


def _open(wire: bytes, nonce_at: int) -> bytes:
    ciphertext, nonce, tag = wire[:nonce_at], wire[nonce_at : nonce_at + 12], wire[nonce_at + 12 :]
    return AESGCM(KEY).decrypt(nonce, ciphertext + tag, None)


class TestTokenFormat:
    def test_length(self, protection):
        assert len(protection.generate_token(SECRET)) == 108

    def test_decrypts_with_plain_aesgcm(self, protection):
        plaintext = _open(protection.generate_token(SECRET).value, nonce_at=80)
        assert len(plaintext) == 80
        assert plaintext[16:] == SECRET

    def test_secret_is_not_visible(self, protection):
        assert SECRET not in protection.generate_token(SECRET).value

    def test_nonce_and_padding_are_fresh(self, protection):
        first = protection.generate_token(SECRET).value
        second = protection.generate_token(SECRET).value
        assert first != second
        assert first[80:92] != second[80:92]
        assert _open(first, 80)[:16] != _open(second, 80)[:16]


class TestCookieFormat:
    def test_length(self, protection):
        assert len(protection.generate_cookie(SECRET, 60)) == 116

    def test_decrypts_with_plain_aesgcm(self, protection):
        plaintext = _open(protection.generate_cookie(SECRET, 60).value, nonce_at=88)
        assert struct.unpack("<q", plaintext[16:24])[0] == NOW + 60
        assert plaintext[24:] == SECRET

    def test_externally_sealed_cookie_is_accepted(self, protection):
        nonce = os.urandom(12)
        plaintext = os.urandom(16) + struct.pack("<q", NOW + 5) + SECRET
        sealed = AESGCM(KEY).encrypt(nonce, plaintext, None)
        parsed = protection.parse_cookie(sealed[:-16] + nonce + sealed[-16:])
        assert parsed.expires == NOW + 5
        assert parsed.secret == SECRET

    def test_associated_data_is_not_accepted(self, protection):
        nonce = os.urandom(12)
        sealed = AESGCM(KEY).encrypt(nonce, os.urandom(16) + SECRET, b"aad")
        with pytest.raises(ValidationFailure):
            protection.parse_token(sealed[:-16] + nonce + sealed[-16:])
