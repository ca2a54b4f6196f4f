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
"""pycsrf Protection — double-submit cookie tokens with pluggable crypto backends."""

from pycsrf.protection.aes_gcm import AesGcmCsrfProtection
from pycsrf.protection.chacha20_poly1305 import ChaCha20Poly1305CsrfProtection
from pycsrf.protection.events import RejectionEvent, RejectionListener, RejectionReason, Subject
from pycsrf.protection.hmac_sha256 import HmacCsrfProtection
from pycsrf.protection.kdf import FAST_PARAMS, KDF_PROFILES, PRODUCTION_PARAMS, ScryptParams, derive_key
from pycsrf.protection.port import CsrfProtection
from pycsrf.protection.random import RandomSource, SystemRandomSource
from pycsrf.protection.types import (
    CSRF_COOKIE_NAME,
    CSRF_FORM_FIELD,
    CSRF_HEADER,
    CSRF_QUERY_STRING,
    KEY_LENGTH,
    SECRET_LENGTH,
    CsrfCookie,
    CsrfToken,
    UnencryptedCsrfCookie,
    UnencryptedCsrfToken,
    decode_b64,
)

BACKENDS: dict[str, type[CsrfProtection]] = {
    HmacCsrfProtection.name: HmacCsrfProtection,
    AesGcmCsrfProtection.name: AesGcmCsrfProtection,
    ChaCha20Poly1305CsrfProtection.name: ChaCha20Poly1305CsrfProtection,
}
"""Backend classes by their configuration name."""

__all__ = [
    # Port
    "CsrfProtection",
    "BACKENDS",
    # Backends
    "AesGcmCsrfProtection",
    "ChaCha20Poly1305CsrfProtection",
    "HmacCsrfProtection",
    # Wire types
    "CsrfCookie",
    "CsrfToken",
    "UnencryptedCsrfCookie",
    "UnencryptedCsrfToken",
    "decode_b64",
    # Identifiers and sizes
    "CSRF_COOKIE_NAME",
    "CSRF_FORM_FIELD",
    "CSRF_HEADER",
    "CSRF_QUERY_STRING",
    "KEY_LENGTH",
    "SECRET_LENGTH",
    # Key derivation
    "FAST_PARAMS",
    "KDF_PROFILES",
    "PRODUCTION_PARAMS",
    "ScryptParams",
    "derive_key",
    # Random source
    "RandomSource",
    "SystemRandomSource",
    # Diagnostics
    "RejectionEvent",
    "RejectionListener",
    "RejectionReason",
    "Subject",
]
