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
"""Unified exception hierarchy for pycsrf.

All library exceptions inherit from PyCsrfException, so callers can catch
one base type or target a specific failure.

Categories:
- CsrfError: failures of the protection capability itself
    - InternalError: local fault (random source exhausted, primitive failure)
    - ValidationFailure: untrusted or stale credential, reject the request
- ConfigurationException: missing or invalid configuration
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PyCsrfException(Exception):
    """Base exception for all pycsrf errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CSRF_VALIDATION").
        context: Arbitrary key-value pairs for error context. Must never hold
            secret values or key material.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Protection Exceptions
# =============================================================================


class CsrfError(PyCsrfException):
    """Base for the two error kinds raised by a CSRF protection capability."""


class InternalError(CsrfError):
    """Local failure unrelated to the request, e.g. the random source failed.

    Treated as a server-side fault; retrying is a caller policy decision.
    """

    def __init__(
        self,
        message: str = "CSRF library error",
        code: str | None = "CSRF_INTERNAL",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)


class ValidationFailure(CsrfError):
    """A token or cookie failed validation.

    Raised for wrong lengths, MAC mismatches, AEAD authentication failures
    and malformed encodings. The message never names the failed check.
    """

    def __init__(
        self,
        message: str = "CSRF validation failed",
        code: str | None = "CSRF_VALIDATION",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(PyCsrfException):
    """Configuration is missing, malformed or names an unknown backend."""

    def __init__(
        self,
        message: str,
        code: str | None = "CSRF_CONFIG",
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)
