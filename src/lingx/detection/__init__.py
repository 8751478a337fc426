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
"""lingx Detection: language preference detection and persistence."""

from lingx.detection.adapters.memory import InMemoryCookieStore, InMemoryKeyValueStore
from lingx.detection.context import DetectionContext, parse_accept_language
from lingx.detection.detector import LanguagePreferenceDetector
from lingx.detection.detectors import (
    CookieDetector,
    DetectorOptions,
    HashDetector,
    HtmlTagDetector,
    LanguageDetector,
    LocalStorageDetector,
    NavigatorDetector,
    PathDetector,
    PersistentLanguageDetector,
    QueryStringDetector,
    SessionStorageDetector,
    SubdomainDetector,
    built_in_detectors,
)
from lingx.detection.ports.outbound import CookieStore, KeyValueStore

__all__ = [
    # Orchestration
    "DetectionContext",
    "DetectorOptions",
    "LanguagePreferenceDetector",
    "parse_accept_language",
    # Strategies
    "CookieDetector",
    "HashDetector",
    "HtmlTagDetector",
    "LanguageDetector",
    "LocalStorageDetector",
    "NavigatorDetector",
    "PathDetector",
    "PersistentLanguageDetector",
    "QueryStringDetector",
    "SessionStorageDetector",
    "SubdomainDetector",
    "built_in_detectors",
    # Ports & adapters
    "CookieStore",
    "InMemoryCookieStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
]
