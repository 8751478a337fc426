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
"""Client subsystem configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from lingx.core.config import config_properties


@config_properties(prefix="lingx.client")
@dataclass
class ClientProperties:
    """Configuration for the translation client (lingx.client.*).

    The remote source is used only when ``api_url``, ``project``, ``space``
    and ``environment`` are all set. ``locale_path`` is fetched over HTTP,
    ``locale_dir`` is read from the filesystem; ``locale_dir`` wins when
    both are set.
    """

    default_language: str = "en"
    fallback_language: str = ""
    available_languages: list[str] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)
    api_url: str = ""
    project: str = ""
    space: str = ""
    environment: str = ""
    locale_path: str = ""
    locale_dir: str = ""
    timeout: float = 30.0


@config_properties(prefix="lingx.client.retry")
@dataclass
class RetryProperties:
    """Retry budget applied to each bundle source (lingx.client.retry.*).

    Delays are in seconds.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 10.0
