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
"""Password-based key derivation with scrypt.

The salt is fixed and compiled in, so two deployments sharing a password
derive the same key. This keeps keys derivable from the password alone,
but it also means there is no per-deployment salt diversity: use a long,
unique password per deployment, or supply key material directly through
``from_key``.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from pycsrf.protection.types import KEY_LENGTH

logger = structlog.get_logger("pycsrf.protection.kdf")

SCRYPT_SALT: bytes = b"rust-csrf-scrypt-salt"
"""Fixed salt; kept byte-for-byte so existing passwords derive the same keys."""


@dataclass(frozen=True)
class ScryptParams:
    """scrypt cost parameters.

    Args:
        log_n: Base-2 logarithm of the CPU/memory cost ``n``.
        r: Block size.
        p: Parallelization factor.
    """

    log_n: int
    r: int
    p: int

    def __post_init__(self) -> None:
        if self.log_n < 1 or self.r < 1 or self.p < 1:
            raise ValueError(f"invalid scrypt parameters: {self}")

    @property
    def n(self) -> int:
        return 1 << self.log_n


PRODUCTION_PARAMS = ScryptParams(log_n=12, r=8, p=1)
"""Cost used in production. Derivation takes a noticeable fraction of a second."""

FAST_PARAMS = ScryptParams(log_n=1, r=8, p=1)
"""Cheap cost for tests and local iteration. Never use in production."""

KDF_PROFILES: dict[str, ScryptParams] = {
    "production": PRODUCTION_PARAMS,
    "fast": FAST_PARAMS,
}


def derive_key(password: str | bytes, params: ScryptParams = PRODUCTION_PARAMS) -> bytes:
    """Derive 32 bytes of key material from *password*.

    Errors from the underlying primitive are not caught: a KDF that cannot
    run is fatal for the process.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")

    kdf = Scrypt(salt=SCRYPT_SALT, length=KEY_LENGTH, n=params.n, r=params.r, p=params.p)
    logger.info("kdf_started", log_n=params.log_n, r=params.r, p=params.p)
    key = kdf.derive(password)
    logger.info("kdf_finished")
    return key
