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
"""Rejection events — classification-only diagnostics for failed checks.

Events name *why* a value was rejected and never carry secret values or
key material.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class RejectionReason(str, Enum):
    """Why a token, cookie or pair was rejected."""

    LENGTH = "rejected-length"
    INTEGRITY = "rejected-integrity"
    PAIRING = "rejected-pairing"
    EXPIRY = "rejected-expiry"


class Subject(str, Enum):
    """What was being checked when the rejection happened."""

    TOKEN = "token"
    COOKIE = "cookie"
    PAIR = "pair"


@dataclass(frozen=True)
class RejectionEvent:
    """A single rejection.

    Attributes:
        reason: The failed check.
        subject: Token, cookie or the token/cookie pair.
        backend: Name of the protection backend, e.g. ``"aes-gcm"``.
    """

    reason: RejectionReason
    subject: Subject
    backend: str


RejectionListener = Callable[[RejectionEvent], None]
"""Callback invoked synchronously for every rejection."""
