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
"""Contract tests run against every protection backend."""

from __future__ import annotations

import os

import pytest

from pycsrf.kernel.exceptions import InternalError, ValidationFailure
from pycsrf.protection import (
    BACKENDS,
    CsrfCookie,
    CsrfProtection,
    CsrfToken,
    UnencryptedCsrfCookie,
    UnencryptedCsrfToken,
    decode_b64,
)

EXPECTED_LENGTHS = {
    "hmac": (96, 104),
    "aes-gcm": (108, 116),
    "chacha20-poly1305": (104, 112),
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _ScriptedRandom:
    """Random source that serves *successes* calls, then fails."""

    def __init__(self, successes: int) -> None:
        self._remaining = successes

    def random_bytes(self, size: int) -> bytes:
        if self._remaining <= 0:
            raise OSError("entropy exhausted")
        self._remaining -= 1
        return os.urandom(size)


class _ShortRandom:
    def random_bytes(self, size: int) -> bytes:
        return b"\x00" * (size - 1)


def _flip(data: bytes, bit: int) -> bytes:
    flipped = bytearray(data)
    flipped[bit // 8] ^= 1 << (bit % 8)
    return bytes(flipped)


# ---------------------------------------------------------------------------
# Wire lengths
# ---------------------------------------------------------------------------


class TestWireLengths:
    def test_class_constants(self, backend: type[CsrfProtection]) -> None:
        token_length, cookie_length = EXPECTED_LENGTHS[backend.name]
        assert backend.TOKEN_LENGTH == token_length
        assert backend.COOKIE_LENGTH == cookie_length

    def test_fixed_key_and_secret(self, protection: CsrfProtection, secret: bytes) -> None:
        token_length, cookie_length = EXPECTED_LENGTHS[protection.name]
        assert len(protection.generate_token(secret)) == token_length
        assert len(protection.generate_cookie(secret, 300)) == cookie_length

    def test_lengths_do_not_depend_on_content(self, backend: type[CsrfProtection]) -> None:
        token_length, cookie_length = EXPECTED_LENGTHS[backend.name]
        for _ in range(5):
            protection = backend.from_key(os.urandom(32))
            secret = os.urandom(64)
            assert len(protection.generate_token(secret).value) == token_length
            assert len(protection.generate_cookie(secret, -10).value) == cookie_length

    def test_registry_covers_all_backends(self) -> None:
        assert set(BACKENDS) == set(EXPECTED_LENGTHS)


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------


class TestRoundTrip:
    def test_token_round_trip(self, protection: CsrfProtection) -> None:
        for _ in range(10):
            secret = os.urandom(64)
            parsed = protection.parse_token(protection.generate_token(secret).value)
            assert isinstance(parsed, UnencryptedCsrfToken)
            assert parsed.secret == secret

    def test_cookie_round_trip(self, protection: CsrfProtection, now: int) -> None:
        for ttl in (0, 1, 300, 86_400):
            secret = os.urandom(64)
            parsed = protection.parse_cookie(protection.generate_cookie(secret, ttl).value)
            assert isinstance(parsed, UnencryptedCsrfCookie)
            assert parsed.secret == secret
            assert parsed.expires == now + ttl

    def test_negative_ttl_is_encoded(self, protection: CsrfProtection, secret: bytes, now: int) -> None:
        parsed = protection.parse_cookie(protection.generate_cookie(secret, -3600).value)
        assert parsed.expires == now - 3600

    def test_round_trip_through_base64(self, protection: CsrfProtection) -> None:
        token, cookie = protection.generate_token_pair(None, 300)
        parsed_token = protection.parse_token(decode_b64(token.b64_string()))
        parsed_url_token = protection.parse_token(decode_b64(token.b64_url_string(), url_safe=True))
        parsed_cookie = protection.parse_cookie(decode_b64(cookie.b64_string()))
        assert parsed_token == parsed_url_token
        assert protection.verify_token_pair(parsed_token, parsed_cookie)

    def test_accepts_bytearray_and_memoryview(self, protection: CsrfProtection, secret: bytes) -> None:
        token = protection.generate_token(secret).value
        assert protection.parse_token(bytearray(token)).secret == secret
        assert protection.parse_token(memoryview(token)).secret == secret

    def test_real_clock_expiry(self, backend: type[CsrfProtection], key: bytes, secret: bytes) -> None:
        import time

        protection = backend.from_key(key)
        before = int(time.time())
        parsed = protection.parse_cookie(protection.generate_cookie(secret, 60).value)
        after = int(time.time())
        assert before + 60 <= parsed.expires <= after + 60


# ---------------------------------------------------------------------------
# Token pairs
# ---------------------------------------------------------------------------


class TestTokenPair:
    def test_pair_verifies(self, protection: CsrfProtection) -> None:
        token, cookie = protection.generate_token_pair(None, 300)
        assert isinstance(token, CsrfToken)
        assert isinstance(cookie, CsrfCookie)
        assert protection.verify_token_pair(
            protection.parse_token(token.value),
            protection.parse_cookie(cookie.value),
        )

    def test_fresh_pairs_use_fresh_secrets(self, protection: CsrfProtection) -> None:
        first, _ = protection.generate_token_pair(None, 300)
        second, _ = protection.generate_token_pair(None, 300)
        assert protection.parse_token(first.value).secret != protection.parse_token(second.value).secret

    def test_mismatched_pair_fails(self, protection: CsrfProtection) -> None:
        token, _ = protection.generate_token_pair(None, 300)
        _, cookie = protection.generate_token_pair(None, 300)
        parsed_token = protection.parse_token(token.value)
        parsed_cookie = protection.parse_cookie(cookie.value)
        assert protection.verify_token_pair(parsed_token, parsed_cookie) is False

    def test_expired_pair_fails(self, protection: CsrfProtection) -> None:
        token, cookie = protection.generate_token_pair(None, -1)
        assert protection.verify_token_pair(
            protection.parse_token(token.value),
            protection.parse_cookie(cookie.value),
        ) is False

    def test_expiry_is_exclusive(self, protection: CsrfProtection) -> None:
        token, cookie = protection.generate_token_pair(None, 0)
        assert protection.verify_token_pair(
            protection.parse_token(token.value),
            protection.parse_cookie(cookie.value),
        ) is False

    def test_previous_secret_is_reused(self, protection: CsrfProtection, secret: bytes) -> None:
        token, cookie = protection.generate_token_pair(secret, 300)
        assert protection.parse_token(token.value).secret == secret
        assert protection.parse_cookie(cookie.value).secret == secret

    def test_refreshed_cookie_matches_rendered_token(self, protection: CsrfProtection) -> None:
        rendered_token, _ = protection.generate_token_pair(None, 300)
        previous = protection.parse_token(rendered_token.value).secret

        _, refreshed_cookie = protection.generate_token_pair(previous, 600)

        parsed_cookie = protection.parse_cookie(refreshed_cookie.value)
        assert protection.verify_token_pair(protection.parse_token(rendered_token.value), parsed_cookie)

    def test_previous_secret_wrong_length(self, protection: CsrfProtection) -> None:
        with pytest.raises(ValueError):
            protection.generate_token_pair(b"short", 300)


# ---------------------------------------------------------------------------
# Tampering and malformed input
# ---------------------------------------------------------------------------


class TestTamperSensitivity:
    def test_every_token_bit_flip_is_rejected(self, protection: CsrfProtection, secret: bytes) -> None:
        token = protection.generate_token(secret).value
        for bit in range(len(token) * 8):
            with pytest.raises(ValidationFailure):
                protection.parse_token(_flip(token, bit))

    def test_every_cookie_bit_flip_is_rejected(self, protection: CsrfProtection, secret: bytes) -> None:
        cookie = protection.generate_cookie(secret, 300).value
        for bit in range(len(cookie) * 8):
            with pytest.raises(ValidationFailure):
                protection.parse_cookie(_flip(cookie, bit))

    def test_truncated_values_are_rejected(self, protection: CsrfProtection, secret: bytes) -> None:
        with pytest.raises(ValidationFailure):
            protection.parse_token(protection.generate_token(secret).value[:-1])
        with pytest.raises(ValidationFailure):
            protection.parse_cookie(protection.generate_cookie(secret, 300).value[:-1])

    def test_extended_values_are_rejected(self, protection: CsrfProtection, secret: bytes) -> None:
        with pytest.raises(ValidationFailure):
            protection.parse_token(protection.generate_token(secret).value + b"\x00")
        with pytest.raises(ValidationFailure):
            protection.parse_cookie(protection.generate_cookie(secret, 300).value + b"\x00")

    @pytest.mark.parametrize("garbage", [b"", "not bytes", None, 12345, [1, 2, 3]])
    def test_garbage_is_rejected(self, protection: CsrfProtection, garbage: object) -> None:
        with pytest.raises(ValidationFailure):
            protection.parse_token(garbage)  # type: ignore[arg-type]
        with pytest.raises(ValidationFailure):
            protection.parse_cookie(garbage)  # type: ignore[arg-type]

    def test_random_bytes_of_right_length_are_rejected(self, protection: CsrfProtection) -> None:
        with pytest.raises(ValidationFailure):
            protection.parse_token(os.urandom(protection.TOKEN_LENGTH))
        with pytest.raises(ValidationFailure):
            protection.parse_cookie(os.urandom(protection.COOKIE_LENGTH))

    def test_token_is_not_a_cookie(self, protection: CsrfProtection, secret: bytes) -> None:
        with pytest.raises(ValidationFailure):
            protection.parse_cookie(protection.generate_token(secret).value)
        with pytest.raises(ValidationFailure):
            protection.parse_token(protection.generate_cookie(secret, 300).value)

    def test_other_key_is_rejected(self, backend: type[CsrfProtection], secret: bytes) -> None:
        issuer = backend.from_key(b"\x01" * 32)
        verifier = backend.from_key(b"\x02" * 32)
        with pytest.raises(ValidationFailure):
            verifier.parse_token(issuer.generate_token(secret).value)
        with pytest.raises(ValidationFailure):
            verifier.parse_cookie(issuer.generate_cookie(secret, 300).value)

    def test_length_checked_before_cryptography(
        self,
        protection: CsrfProtection,
        secret: bytes,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _must_not_run(data: bytes) -> bytes:
            raise AssertionError("integrity check ran on a wrong-length value")

        token = protection.generate_token(secret).value
        cookie = protection.generate_cookie(secret, 300).value
        monkeypatch.setattr(protection, "_open_token", _must_not_run)
        monkeypatch.setattr(protection, "_open_cookie", _must_not_run)

        with pytest.raises(ValidationFailure):
            protection.parse_token(token[:-1])
        with pytest.raises(ValidationFailure):
            protection.parse_cookie(cookie[:-1])


class TestOtherBackendValues:
    def test_values_from_another_backend_are_rejected(self, key: bytes, secret: bytes) -> None:
        for issuer_cls in BACKENDS.values():
            issuer = issuer_cls.from_key(key)
            token = issuer.generate_token(secret).value
            cookie = issuer.generate_cookie(secret, 300).value
            for verifier_cls in BACKENDS.values():
                if verifier_cls is issuer_cls:
                    continue
                verifier = verifier_cls.from_key(key)
                with pytest.raises(ValidationFailure):
                    verifier.parse_token(token)
                with pytest.raises(ValidationFailure):
                    verifier.parse_cookie(cookie)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_wrong_key_length(self, backend: type[CsrfProtection]) -> None:
        for length in (0, 16, 31, 33, 64):
            with pytest.raises(ValueError):
                backend.from_key(b"\x00" * length)

    def test_wrong_secret_length(self, protection: CsrfProtection) -> None:
        with pytest.raises(ValueError):
            protection.generate_token(b"\x00" * 63)
        with pytest.raises(ValueError):
            protection.generate_cookie(b"\x00" * 65, 300)

    def test_random_failure_is_internal_error(self, backend: type[CsrfProtection], key: bytes) -> None:
        protection = backend.from_key(key, random_source=_ScriptedRandom(successes=0))
        with pytest.raises(InternalError):
            protection.random_bytes(16)
        with pytest.raises(InternalError):
            protection.generate_token_pair(None, 300)

    def test_short_random_is_internal_error(self, backend: type[CsrfProtection], key: bytes) -> None:
        protection = backend.from_key(key, random_source=_ShortRandom())
        with pytest.raises(InternalError):
            protection.random_bytes(16)

    def test_encoding_failure_in_pair_is_validation_failure(self, key: bytes, secret: bytes) -> None:
        # AEAD backends draw padding and a nonce per encode; HMAC draws nothing.
        for name in ("aes-gcm", "chacha20-poly1305"):
            protection = BACKENDS[name].from_key(key, random_source=_ScriptedRandom(successes=2))
            with pytest.raises(ValidationFailure):
                protection.generate_token_pair(secret, 300)

    def test_overflowing_ttl_in_pair_is_validation_failure(self, protection: CsrfProtection, secret: bytes) -> None:
        with pytest.raises(ValidationFailure):
            protection.generate_token_pair(secret, 2**63 - 1)
        with pytest.raises(ValidationFailure):
            protection.generate_token_pair(None, 2**63 - 1)

    def test_overflowing_ttl_in_cookie_is_value_error(self, protection: CsrfProtection, secret: bytes) -> None:
        with pytest.raises(ValueError):
            protection.generate_cookie(secret, 2**63 - 1)

    def test_aead_generate_token_raises_internal_error(self, key: bytes, secret: bytes) -> None:
        for name in ("aes-gcm", "chacha20-poly1305"):
            protection = BACKENDS[name].from_key(key, random_source=_ScriptedRandom(successes=0))
            with pytest.raises(InternalError):
                protection.generate_token(secret)
            with pytest.raises(InternalError):
                protection.generate_cookie(secret, 300)

    def test_hmac_needs_no_randomness_for_encoding(self, key: bytes, secret: bytes) -> None:
        protection = BACKENDS["hmac"].from_key(key, random_source=_ScriptedRandom(successes=0))
        token, cookie = protection.generate_token_pair(secret, 300)
        assert protection.parse_token(token.value).secret == secret
        assert protection.parse_cookie(cookie.value).secret == secret


class TestRepr:
    def test_repr_hides_key(self, protection: CsrfProtection, key: bytes) -> None:
        text = repr(protection)
        assert protection.name in text
        assert key.decode() not in text
