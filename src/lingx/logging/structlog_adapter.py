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
"""StructlogAdapter: renders lingx's structured events through structlog.

SDK modules emit events such as ``translation_missing`` or
``bundle_source_failed`` on loggers under ``lingx``. The adapter
attaches a single handler to the ``lingx`` stdlib logger, so host
applications keep their own root logging setup untouched.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from lingx.config.properties.logging import LoggingProperties
from lingx.core.config import Config

SDK_LOGGER = "lingx"


def add_sdk_name(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("sdk", SDK_LOGGER)
    return event_dict


class StructlogAdapter:
    """Default logging adapter backed by structlog.

    Args:
        stream: Destination of rendered events; stderr when omitted.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._handler: logging.Handler | None = None
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        """Configure rendering and levels from ``lingx.logging``."""
        props = config.bind(LoggingProperties)
        levels = {name: str(level).upper() for name, level in props.level.items()}
        self._root_level = levels.pop("root", "INFO")
        self._module_levels = levels
        self._format = str(props.format).lower()

        shared = self._shared_processors()
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *shared,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
        self._install_handler(shared)

        self.set_level(SDK_LOGGER, self._root_level)
        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def reset(self) -> None:
        """Detach the handler and restore structlog's defaults."""
        if self._handler is not None:
            sdk_logger = logging.getLogger(SDK_LOGGER)
            sdk_logger.removeHandler(self._handler)
            sdk_logger.propagate = True
            self._handler = None
        structlog.reset_defaults()

    def _shared_processors(self) -> list[Processor]:
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_sdk_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

    def _install_handler(self, shared: list[Processor]) -> None:
        renderers: list[Processor]
        if self._format == "json":
            renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        else:
            renderers = [structlog.dev.ConsoleRenderer(colors=False)]

        handler = logging.StreamHandler(self._stream or sys.stderr)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared,
                processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
            )
        )

        sdk_logger = logging.getLogger(SDK_LOGGER)
        if self._handler is not None:
            sdk_logger.removeHandler(self._handler)
        sdk_logger.addHandler(handler)
        sdk_logger.propagate = False
        self._handler = handler
