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
"""Shared fixtures for protection backend tests."""

from __future__ import annotations

import pytest

from pycsrf.protection import (
    AesGcmCsrfProtection,
    ChaCha20Poly1305CsrfProtection,
    CsrfProtection,
    HmacCsrfProtection,
)

NOW = 1_700_000_000


@pytest.fixture
def key() -> bytes:
    return b"01234567012345670123456701234567"


@pytest.fixture
def secret() -> bytes:
    return bytes(range(64))


@pytest.fixture
def now() -> int:
    return NOW


@pytest.fixture(
    params=[HmacCsrfProtection, AesGcmCsrfProtection, ChaCha20Poly1305CsrfProtection],
    ids=lambda cls: cls.name,
)
def backend(request: pytest.FixtureRequest) -> type[CsrfProtection]:
    return request.param


@pytest.fixture
def protection(backend: type[CsrfProtection], key: bytes) -> CsrfProtection:
    return backend.from_key(key, clock=lambda: NOW)
