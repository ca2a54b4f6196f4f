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
"""StructlogAdapter — LoggingPort implementation backed by structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from pycsrf.config.properties.logging import LoggingProperties
from pycsrf.core.config import Config

_ROOT = "root"
_PREFIX = "pycsrf"


class StructlogAdapter:
    """Routes pycsrf's structlog events through stdlib logging to one stream.

    The stream defaults to stderr, read when :meth:`configure` runs, so
    token output written to stdout by the CLI stays machine-readable.
    ``pycsrf.logging.level`` holds the ``root`` level plus optional
    per-logger levels; ``pycsrf.logging.format`` is ``console`` or ``json``.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._properties = LoggingProperties()

    @property
    def properties(self) -> LoggingProperties:
        """The properties applied by the last :meth:`configure` call."""
        return self._properties

    def configure(self, config: Config) -> LoggingProperties:
        props = config.bind(LoggingProperties)
        levels = {name: str(level).upper() for name, level in props.level.items()}
        root_level = levels.pop(_ROOT, "INFO")
        props.level = {_ROOT: root_level, **levels}
        props.format = str(props.format).lower()

        renderer: structlog.types.Processor
        if props.format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(colors=False)

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

        handler = logging.StreamHandler(self._stream if self._stream is not None else sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logging.basicConfig(handlers=[handler], level=_to_level(root_level), force=True)
        for name, level in levels.items():
            self.set_level(name, level)

        self._properties = props
        return props

    def get_logger(self, area: str) -> Any:
        name = area if area == _PREFIX or area.startswith(f"{_PREFIX}.") else f"{_PREFIX}.{area}"
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_to_level(level))


def _to_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO
