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
"""CSRF protection configuration properties."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from pycsrf.core.config import config_properties
from pycsrf.protection.types import (
    CSRF_COOKIE_NAME,
    CSRF_FORM_FIELD,
    CSRF_HEADER,
    CSRF_QUERY_STRING,
)


@config_properties(prefix="pycsrf.csrf")
class CsrfProperties(BaseModel):
    """Configuration for the protection capability (pycsrf.csrf.*).

    Exactly one of key (base64, 32 bytes once decoded) or password
    should be set; key wins when both are present. kdf_profile
    selects the scrypt cost used with password.
    """

    backend: Literal["hmac", "aes-gcm", "chacha20-poly1305"] = "aes-gcm"
    key: str | None = None
    password: str | None = None
    kdf_profile: Literal["production", "fast"] = "production"
    ttl_seconds: int = Field(default=3600)
    cookie_name: str = Field(default=CSRF_COOKIE_NAME, min_length=1)
    form_field: str = Field(default=CSRF_FORM_FIELD, min_length=1)
    header_name: str = Field(default=CSRF_HEADER, min_length=1)
    query_param: str = Field(default=CSRF_QUERY_STRING, min_length=1)
