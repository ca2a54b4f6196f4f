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
"""LoggingPort — how pycsrf entry points set up library logging.

Library modules never configure logging themselves; they log through
``structlog.get_logger("pycsrf.<area>")``. An entry point (the CLI, or an
application embedding pycsrf) configures an adapter once from
``pycsrf.logging.*``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pycsrf.config.properties.logging import LoggingProperties
from pycsrf.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Configures the loggers used by pycsrf."""

    def configure(self, config: Config) -> LoggingProperties:
        """Apply ``pycsrf.logging.*`` and return the properties that were applied."""
        ...

    def get_logger(self, area: str) -> Any:
        """Return the logger for a pycsrf area, e.g. ``"protection"``."""
        ...

    def set_level(self, name: str, level: str) -> None: ...
