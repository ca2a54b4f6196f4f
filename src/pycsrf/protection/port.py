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
"""CsrfProtection — the port every cryptographic backend implements.

The base class owns everything that is backend independent: key and secret
length checks, expiry computation, random bytes, token pair issuance, the
length check that runs before any cryptography, and pair verification.
Backends only implement the four ``_seal_*`` / ``_open_*`` hooks.

Parsing follows one path per value::

    raw bytes -> length checked -> integrity verified -> Unencrypted value

Any failure along the way raises :class:`ValidationFailure`. A rejected value
is never repaired; the server issues a new pair instead.
"""

from __future__ import annotations

import abc
import secrets
import time
from collections.abc import Callable, Iterable
from typing import Any, ClassVar, TypeVar

import structlog
from cryptography.exceptions import InvalidSignature, InvalidTag

from pycsrf.kernel.exceptions import CsrfError, InternalError, ValidationFailure
from pycsrf.protection.events import (
    RejectionEvent,
    RejectionListener,
    RejectionReason,
    Subject,
)
from pycsrf.protection.kdf import PRODUCTION_PARAMS, ScryptParams, derive_key
from pycsrf.protection.layout import decode_expires, encode_expires
from pycsrf.protection.random import RandomSource, SystemRandomSource
from pycsrf.protection.types import (
    KEY_LENGTH,
    SECRET_LENGTH,
    CsrfCookie,
    CsrfToken,
    UnencryptedCsrfCookie,
    UnencryptedCsrfToken,
)

logger = structlog.get_logger("pycsrf.protection")

P = TypeVar("P", bound="CsrfProtection")

_BYTES_LIKE = (bytes, bytearray, memoryview)


class CsrfProtection(abc.ABC):
    """Issues and verifies CSRF token/cookie pairs.

    Instances are immutable after construction and safe to share between
    threads.

    Args:
        key: 32 bytes of key material.
        random_source: CSPRNG used for secrets, nonces and padding.
        clock: Returns the current time in seconds since the Unix epoch.
        listeners: Called with a :class:`RejectionEvent` for every rejection.
    """

    name: ClassVar[str]
    """Stable backend identifier used in configuration and diagnostics."""

    TOKEN_LENGTH: ClassVar[int]
    COOKIE_LENGTH: ClassVar[int]

    def __init__(
        self,
        key: bytes,
        *,
        random_source: RandomSource | None = None,
        clock: Callable[[], float] | None = None,
        listeners: Iterable[RejectionListener] = (),
    ) -> None:
        if not isinstance(key, _BYTES_LIKE) or len(key) != KEY_LENGTH:
            raise ValueError(f"key material must be exactly {KEY_LENGTH} bytes")
        self._key = bytes(key)
        self._random: RandomSource = random_source if random_source is not None else SystemRandomSource()
        self._clock: Callable[[], float] = clock if clock is not None else time.time
        self._listeners: tuple[RejectionListener, ...] = tuple(listeners)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_key(cls: type[P], key: bytes, **kwargs: Any) -> P:
        """Build an instance around caller-managed key material."""
        return cls(key, **kwargs)

    @classmethod
    def from_password(
        cls: type[P],
        password: str | bytes,
        params: ScryptParams = PRODUCTION_PARAMS,
        **kwargs: Any,
    ) -> P:
        """Derive key material from *password* with scrypt and build an instance.

        Derivation is slow; call it once at startup.
        """
        return cls.from_key(derive_key(password, params), **kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(backend={self.name!r})"

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def _seal_token(self, secret: bytes) -> bytes:
        """Return the wire bytes of a token carrying *secret*."""
        ...

    @abc.abstractmethod
    def _seal_cookie(self, secret: bytes, expires: bytes) -> bytes:
        """Return the wire bytes of a cookie carrying *secret* and encoded *expires*."""
        ...

    @abc.abstractmethod
    def _open_token(self, data: bytes) -> bytes:
        """Verify a length-checked token and return its secret.

        Raises ``InvalidSignature`` or ``InvalidTag`` on integrity failure.
        """
        ...

    @abc.abstractmethod
    def _open_cookie(self, data: bytes) -> tuple[bytes, bytes]:
        """Verify a length-checked cookie and return ``(secret, encoded expires)``.

        Raises ``InvalidSignature`` or ``InvalidTag`` on integrity failure.
        """
        ...

    # ------------------------------------------------------------------
    # Issuance
    # ------------------------------------------------------------------

    def now(self) -> int:
        """Current time in whole seconds since the Unix epoch."""
        return int(self._clock())

    def random_bytes(self, size: int) -> bytes:
        """Return *size* bytes from the random source.

        Raises:
            InternalError: If the random source fails or comes up short.
        """
        try:
            data = self._random.random_bytes(size)
        except OSError as exc:
            logger.warning("random_source_failed", backend=self.name, size=size)
            raise InternalError() from exc
        if len(data) != size:
            logger.warning("random_source_short", backend=self.name, size=size, received=len(data))
            raise InternalError()
        return data

    def generate_token(self, secret: bytes) -> CsrfToken:
        """Encode *secret* as a token.

        Raises:
            InternalError: If random bytes for the encoding cannot be drawn.
        """
        return CsrfToken(self._seal_token(_check_secret(secret)))

    def generate_cookie(self, secret: bytes, ttl_seconds: int) -> CsrfCookie:
        """Encode *secret* as a cookie that expires *ttl_seconds* from now.

        A negative TTL produces a cookie that is already expired.

        Raises:
            InternalError: If random bytes for the encoding cannot be drawn.
        """
        expires = encode_expires(self.now() + int(ttl_seconds))
        return CsrfCookie(self._seal_cookie(_check_secret(secret), expires))

    def generate_token_pair(
        self,
        previous_secret: bytes | None,
        ttl_seconds: int,
    ) -> tuple[CsrfToken, CsrfCookie]:
        """Issue a matching token and cookie.

        Passing the secret of an earlier pair as *previous_secret* refreshes
        the cookie's expiry without invalidating tokens already rendered for
        that secret. Otherwise a fresh 64-byte secret is drawn.

        Raises:
            InternalError: If a fresh secret cannot be drawn.
            ValidationFailure: If encoding either half fails, including an
                expiry that does not fit in a signed 64-bit integer.
        """
        if previous_secret is None:
            logger.debug("csrf_secret_generated", backend=self.name)
            secret = self.random_bytes(SECRET_LENGTH)
        else:
            secret = _check_secret(previous_secret)

        try:
            token = self.generate_token(secret)
            cookie = self.generate_cookie(secret, ttl_seconds)
        except (CsrfError, ValueError) as exc:
            raise ValidationFailure() from exc
        return token, cookie

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse_token(self, data: bytes) -> UnencryptedCsrfToken:
        """Length-check, verify and decode a token.

        Raises:
            ValidationFailure: On a wrong length or an integrity failure.
        """
        if not isinstance(data, _BYTES_LIKE) or len(data) != self.TOKEN_LENGTH:
            raise self._reject(RejectionReason.LENGTH, Subject.TOKEN)
        try:
            secret = self._open_token(bytes(data))
        except (InvalidSignature, InvalidTag):
            raise self._reject(RejectionReason.INTEGRITY, Subject.TOKEN) from None
        return UnencryptedCsrfToken(secret=secret)

    def parse_cookie(self, data: bytes) -> UnencryptedCsrfCookie:
        """Length-check, verify and decode a cookie.

        Expiry is not checked here; see :meth:`verify_token_pair`.

        Raises:
            ValidationFailure: On a wrong length or an integrity failure.
        """
        if not isinstance(data, _BYTES_LIKE) or len(data) != self.COOKIE_LENGTH:
            raise self._reject(RejectionReason.LENGTH, Subject.COOKIE)
        try:
            secret, expires = self._open_cookie(bytes(data))
        except (InvalidSignature, InvalidTag):
            raise self._reject(RejectionReason.INTEGRITY, Subject.COOKIE) from None
        return UnencryptedCsrfCookie(expires=decode_expires(expires), secret=secret)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify_token_pair(self, token: UnencryptedCsrfToken, cookie: UnencryptedCsrfCookie) -> bool:
        """Return ``True`` iff both carry the same secret and the cookie has not expired.

        Works on already-parsed values only; no cryptography runs here.
        """
        tokens_match = secrets.compare_digest(token.secret, cookie.secret)
        if not tokens_match:
            self._reject(RejectionReason.PAIRING, Subject.PAIR)

        now = self.now()
        not_expired = cookie.expires > now
        if not not_expired:
            self._reject(RejectionReason.EXPIRY, Subject.PAIR, expires=cookie.expires, now=now)

        return tokens_match and not_expired

    def _reject(self, reason: RejectionReason, subject: Subject, **details: int) -> ValidationFailure:
        event = RejectionEvent(reason=reason, subject=subject, backend=self.name)
        log = logger.info if reason is RejectionReason.INTEGRITY else logger.debug
        log("csrf_rejected", reason=reason.value, subject=subject.value, backend=self.name, **details)
        for listener in self._listeners:
            listener(event)
        return ValidationFailure()


def _check_secret(secret: bytes) -> bytes:
    if not isinstance(secret, _BYTES_LIKE) or len(secret) != SECRET_LENGTH:
        raise ValueError(f"secret must be exactly {SECRET_LENGTH} bytes")
    return bytes(secret)
