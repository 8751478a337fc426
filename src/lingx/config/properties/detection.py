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
"""Language detection configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from lingx.core.config import config_properties


@config_properties(prefix="lingx.detection")
@dataclass
class DetectionProperties:
    """Configuration for language detection and persistence (lingx.detection.*)."""

    enabled: bool = True
    order: list[str] = field(default_factory=lambda: ["querystring", "cookie", "localStorage", "navigator"])
    caches: list[str] = field(default_factory=lambda: ["cookie", "localStorage"])
    exclude_cache_for: list[str] = field(default_factory=lambda: ["cimode"])
    cookie_name: str = "lingx-lang"
    cookie_max_age: int = 31536000
    cookie_domain: str = ""
    storage_key: str = "lingx-lang"
