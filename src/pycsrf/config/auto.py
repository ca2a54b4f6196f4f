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
"""Auto-configuration — build a CsrfProtection from configuration properties."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable

import structlog

from pycsrf.config.properties.csrf import CsrfProperties
from pycsrf.core.config import Config
from pycsrf.kernel.exceptions import ConfigurationException
from pycsrf.protection import BACKENDS, KDF_PROFILES, KEY_LENGTH, CsrfProtection, RejectionListener

logger = structlog.get_logger("pycsrf.config.auto")


class CsrfAutoConfiguration:
    """Wire a protection backend from ``pycsrf.csrf.*`` properties.

    Key material comes from ``pycsrf.csrf.key`` (base64) when set, otherwise
    it is derived from ``pycsrf.csrf.password`` with the scrypt cost named by
    ``pycsrf.csrf.kdf_profile``. How the key or password reaches the
    configuration (file, ``PYCSRF_CSRF_KEY`` env var, placeholder) is up to
    the deployment.
    """

    @staticmethod
    def properties(config: Config) -> CsrfProperties:
        """Bind and validate the CSRF properties."""
        try:
            return config.bind(CsrfProperties)
        except ValueError as exc:
            raise ConfigurationException(str(exc)) from exc

    @staticmethod
    def decode_key(encoded: str) -> bytes:
        """Decode a base64 key and check it is exactly 32 bytes."""
        try:
            key = base64.b64decode(encoded.strip(), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ConfigurationException("pycsrf.csrf.key must be valid base64") from exc
        if len(key) != KEY_LENGTH:
            raise ConfigurationException(f"pycsrf.csrf.key must decode to exactly {KEY_LENGTH} bytes")
        return key

    @classmethod
    def protection(
        cls,
        config: Config,
        listeners: Iterable[RejectionListener] = (),
    ) -> CsrfProtection:
        """Build the configured backend.

        Raises:
            ConfigurationException: If the backend is unknown or neither a
                valid key nor a password is configured.
        """
        props = cls.properties(config)
        backend = BACKENDS.get(props.backend)
        if backend is None:
            raise ConfigurationException(f"Unknown CSRF backend '{props.backend}'", context={"backend": props.backend})

        if props.key:
            protection = backend.from_key(cls.decode_key(props.key), listeners=listeners)
            key_source = "key"
        elif props.password:
            params = KDF_PROFILES[props.kdf_profile]
            protection = backend.from_password(props.password, params, listeners=listeners)
            key_source = f"password ({props.kdf_profile})"
        else:
            raise ConfigurationException(
                "No CSRF key material configured: set pycsrf.csrf.key or pycsrf.csrf.password",
            )

        logger.info("auto_config_protection", backend=protection.name, key_source=key_source)
        return protection
