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
"""pycsrf — double-submit cookie CSRF protection primitives."""

__version__ = "0.3.0"

from pycsrf.kernel.exceptions import (  # noqa: E402
    ConfigurationException,
    CsrfError,
    InternalError,
    PyCsrfException,
    ValidationFailure,
)
from pycsrf.protection import (  # noqa: E402
    BACKENDS,
    AesGcmCsrfProtection,
    ChaCha20Poly1305CsrfProtection,
    CsrfCookie,
    CsrfProtection,
    CsrfToken,
    HmacCsrfProtection,
    UnencryptedCsrfCookie,
    UnencryptedCsrfToken,
    decode_b64,
)

__all__ = [
    "__version__",
    "BACKENDS",
    "AesGcmCsrfProtection",
    "ChaCha20Poly1305CsrfProtection",
    "ConfigurationException",
    "CsrfCookie",
    "CsrfError",
    "CsrfProtection",
    "CsrfToken",
    "HmacCsrfProtection",
    "InternalError",
    "PyCsrfException",
    "UnencryptedCsrfCookie",
    "UnencryptedCsrfToken",
    "ValidationFailure",
    "decode_b64",
]
