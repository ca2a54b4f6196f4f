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
"""Random source port and the system CSPRNG adapter."""

from __future__ import annotations

import secrets
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Port for a cryptographically secure random byte source.

    Implementations must be safe to call from several threads at once.
    Failures are signalled by raising OSError.
    """

    def random_bytes(self, size: int) -> bytes:
        """Return *size* random bytes."""
        ...


class SystemRandomSource:
    """RandomSource adapter over the operating system CSPRNG (``secrets``)."""

    def random_bytes(self, size: int) -> bytes:
        """Return *size* bytes from the OS random source."""
        return secrets.token_bytes(size)
