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
"""LanguagePreferenceDetector: ordered detection and persistence of the user's language."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping

import structlog

from lingx.config.properties.detection import DetectionProperties
from lingx.detection.context import DetectionContext
from lingx.detection.detectors import (
    DetectorOptions,
    LanguageDetector,
    PersistentLanguageDetector,
    built_in_detectors,
)
from lingx.kernel.exceptions import InfrastructureException
from lingx.kernel.result import Result

logger = structlog.get_logger("lingx.detection")

# Errors a store may raise when it is blocked, full or unreachable.
_STORE_ERRORS = (OSError, InfrastructureException)


class LanguagePreferenceDetector:
    """Runs strategies in configured order and remembers the chosen language.

    Strategies live in a name-to-strategy mapping; ``order`` and ``caches``
    in the options are plain lists of names, so a custom strategy becomes
    active once it is registered with :meth:`add_detector` and named in the
    order.

    Usage::

        detector = LanguagePreferenceDetector(
            context=DetectionContext.from_headers(url, request_headers),
        )
        language = detector.detect(["en", "de"], "en")
        detector.cache_language(language, ["en", "de"])
    """

    def __init__(
        self,
        options: DetectorOptions | None = None,
        context: DetectionContext | None = None,
        detectors: Mapping[str, LanguageDetector] | None = None,
    ) -> None:
        self._options = options or DetectorOptions()
        self.context = context or DetectionContext()
        self._detectors: dict[str, LanguageDetector] = (
            dict(detectors) if detectors is not None else built_in_detectors()
        )

    @classmethod
    def from_properties(
        cls, properties: DetectionProperties, context: DetectionContext | None = None
    ) -> LanguagePreferenceDetector:
        options = DetectorOptions(
            order=tuple(properties.order),
            caches=tuple(properties.caches),
            exclude_cache_for=frozenset(properties.exclude_cache_for),
            cookie_name=properties.cookie_name,
            cookie_max_age=properties.cookie_max_age,
            cookie_domain=properties.cookie_domain or None,
            storage_key=properties.storage_key,
        )
        return cls(options=options, context=context)

    @property
    def options(self) -> DetectorOptions:
        return self._options

    @property
    def detector_names(self) -> list[str]:
        return list(self._detectors)

    def add_detector(self, detector: LanguageDetector) -> None:
        """Register *detector*, replacing any strategy with the same name."""
        self._detectors[detector.name] = detector

    def remove_detector(self, name: str) -> None:
        self._detectors.pop(name, None)

    def detect(self, supported_languages: Iterable[str], fallback_language: str) -> str:
        """Return the first detected language that is supported, else *fallback_language*."""
        options = self._with_supported(supported_languages, fallback_language)

        for name in options.order:
            detector = self._detectors.get(name)
            if detector is None:
                continue
            result = self._lookup(detector, options)
            if not result.ok:
                logger.debug("detector_lookup_failed", detector=name, error=str(result.error))
                continue
            if result.value and result.value in options.supported_languages:
                logger.debug("language_detected", detector=name, language=result.value)
                return result.value

        return fallback_language

    def cache_language(self, language: str, supported_languages: Iterable[str]) -> None:
        """Persist *language* through every strategy named in ``caches``.

        Excluded languages and languages outside *supported_languages* are
        never stored.
        """
        options = self._with_supported(supported_languages)
        if language in options.exclude_cache_for or language not in options.supported_languages:
            return

        for detector in self._persistent(options):
            try:
                detector.cache_user_language(language, options, self.context)
            except _STORE_ERRORS as exc:
                logger.debug("detector_cache_failed", detector=detector.name, error=str(exc))

    def clear_cache(self, supported_languages: Iterable[str] = ()) -> None:
        """Remove the stored language from every caching strategy."""
        options = self._with_supported(supported_languages)
        for detector in self._persistent(options):
            try:
                detector.clear_user_language(options, self.context)
            except _STORE_ERRORS as exc:
                logger.debug("detector_clear_failed", detector=detector.name, error=str(exc))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _with_supported(self, supported_languages: Iterable[str], fallback_language: str = "") -> DetectorOptions:
        return dataclasses.replace(
            self._options,
            supported_languages=tuple(supported_languages),
            fallback_language=fallback_language,
        )

    def _lookup(self, detector: LanguageDetector, options: DetectorOptions) -> Result[str | None]:
        try:
            return Result.success(detector.lookup(options, self.context))
        except _STORE_ERRORS as exc:
            return Result.recovered(None, exc)

    def _persistent(self, options: DetectorOptions) -> list[PersistentLanguageDetector]:
        found: list[PersistentLanguageDetector] = []
        for name in options.caches:
            detector = self._detectors.get(name)
            if isinstance(detector, PersistentLanguageDetector):
                found.append(detector)
        return found
