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
"""lingx Client: runtime translation client, bundle sources and retry."""

from lingx.client.adapters.httpx_adapter import HttpxClientAdapter
from lingx.client.bundles import prefix_namespace, resolve_message, select_static_bundle
from lingx.client.ports.outbound import HttpClientPort, HttpResponse
from lingx.client.retry import RetryPolicy
from lingx.client.runtime import TranslateFunction, TranslationClient
from lingx.client.sources import (
    BundleSource,
    FileSystemBundleSource,
    LoadedBundle,
    LocalHttpBundleSource,
    RemoteBundleSource,
    SdkTranslationsResponse,
)

__all__ = [
    # Client
    "TranslateFunction",
    "TranslationClient",
    # Sources
    "BundleSource",
    "FileSystemBundleSource",
    "LoadedBundle",
    "LocalHttpBundleSource",
    "RemoteBundleSource",
    "SdkTranslationsResponse",
    # Resilience
    "RetryPolicy",
    # Ports & adapters
    "HttpClientPort",
    "HttpResponse",
    "HttpxClientAdapter",
    # Bundles
    "prefix_namespace",
    "resolve_message",
    "select_static_bundle",
]
