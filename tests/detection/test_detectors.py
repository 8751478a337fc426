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
"""Tests for the built-in detection strategies."""

import pytest

from lingx.detection import (
    CookieDetector,
    DetectionContext,
    DetectorOptions,
    HashDetector,
    HtmlTagDetector,
    InMemoryCookieStore,
    InMemoryKeyValueStore,
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

SUPPORTED = DetectorOptions(supported_languages=("en", "de", "fr"))


class TestRegistry:
    def test_all_built_ins_registered_by_name(self):
        assert set(built_in_detectors()) == {
            "cookie",
            "localStorage",
            "sessionStorage",
            "navigator",
            "querystring",
            "path",
            "htmlTag",
            "hash",
            "subdomain",
        }

    def test_every_strategy_is_a_detector(self):
        for detector in built_in_detectors().values():
            assert isinstance(detector, LanguageDetector)

    def test_only_storage_strategies_persist(self):
        persistent = {
            name for name, detector in built_in_detectors().items() if isinstance(detector, PersistentLanguageDetector)
        }
        assert persistent == {"cookie", "localStorage", "sessionStorage"}


class TestUrlStrategies:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://x.test/?lang=de", "de"),
            ("https://x.test/?lng=fr", "fr"),
            ("https://x.test/?locale=de", "de"),
            ("https://x.test/?lang=xx", None),
            ("https://x.test/", None),
        ],
    )
    def test_querystring(self, url, expected):
        assert QueryStringDetector().lookup(SUPPORTED, DetectionContext(url=url)) == expected

    @pytest.mark.parametrize(
        "url,expected",
        [("https://x.test/de/about", "de"), ("https://x.test/about", None), ("https://x.test/", None)],
    )
    def test_path(self, url, expected):
        assert PathDetector().lookup(SUPPORTED, DetectionContext(url=url)) == expected

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://x.test/#lang=de", "de"),
            ("https://x.test/#lng=fr", "fr"),
            ("https://x.test/#/de/settings", "de"),
            ("https://x.test/#/xx", None),
            ("https://x.test/", None),
        ],
    )
    def test_hash(self, url, expected):
        assert HashDetector().lookup(SUPPORTED, DetectionContext(url=url)) == expected

    @pytest.mark.parametrize(
        "url,expected",
        [("https://de.example.com/", "de"), ("https://www.example.com/", None)],
    )
    def test_subdomain(self, url, expected):
        assert SubdomainDetector().lookup(SUPPORTED, DetectionContext(url=url)) == expected

    def test_html_tag(self):
        assert HtmlTagDetector().lookup(SUPPORTED, DetectionContext(html_lang="de")) == "de"
        assert HtmlTagDetector().lookup(SUPPORTED, DetectionContext(html_lang="")) is None


class TestNavigator:
    def test_exact_tag_first(self):
        options = DetectorOptions(supported_languages=("en", "en-GB"))
        context = DetectionContext(languages=["en-GB", "en"])
        assert NavigatorDetector().lookup(options, context) == "en-GB"

    def test_base_subtag(self):
        context = DetectionContext(languages=["de-AT", "en"])
        assert NavigatorDetector().lookup(SUPPORTED, context) == "de"

    def test_no_match(self):
        assert NavigatorDetector().lookup(SUPPORTED, DetectionContext(languages=["ja-JP"])) is None


class TestCookieStrategy:
    def test_roundtrip_and_header(self):
        cookies = InMemoryCookieStore()
        context = DetectionContext(cookies=cookies)
        detector = CookieDetector()

        detector.cache_user_language("de", SUPPORTED, context)

        assert detector.lookup(SUPPORTED, context) == "de"
        assert cookies.set_cookie_headers == ["lingx-lang=de; path=/; max-age=31536000; SameSite=Lax"]

    def test_domain_attribute(self):
        cookies = InMemoryCookieStore()
        options = DetectorOptions(cookie_domain=".example.com", cookie_max_age=60)
        CookieDetector().cache_user_language("fr", options, DetectionContext(cookies=cookies))
        assert cookies.set_cookie_headers == ["lingx-lang=fr; path=/; max-age=60; SameSite=Lax; domain=.example.com"]

    def test_clear_expires_cookie_explicitly(self):
        cookies = InMemoryCookieStore({"lingx-lang": "de"})
        context = DetectionContext(cookies=cookies)

        CookieDetector().clear_user_language(SUPPORTED, context)

        assert cookies.get("lingx-lang") is None
        assert cookies.set_cookie_headers == ["lingx-lang=; path=/; max-age=0; SameSite=Lax"]


class TestStorageStrategies:
    def test_local_storage(self):
        store = InMemoryKeyValueStore()
        context = DetectionContext(local_storage=store)
        detector = LocalStorageDetector()

        detector.cache_user_language("fr", SUPPORTED, context)
        assert store.get_item("lingx-lang") == "fr"
        assert detector.lookup(SUPPORTED, context) == "fr"

        detector.clear_user_language(SUPPORTED, context)
        assert detector.lookup(SUPPORTED, context) is None

    def test_session_storage_uses_same_key(self):
        store = InMemoryKeyValueStore({"lingx-lang": "de"})
        assert SessionStorageDetector().lookup(SUPPORTED, DetectionContext(session_storage=store)) == "de"

    def test_unavailable_store(self):
        context = DetectionContext()
        assert LocalStorageDetector().lookup(SUPPORTED, context) is None
        LocalStorageDetector().cache_user_language("de", SUPPORTED, context)
