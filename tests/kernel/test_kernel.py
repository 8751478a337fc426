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
"""Tests for the kernel: exception hierarchy and Result."""

from lingx.kernel import (
    InfrastructureException,
    LingxException,
    MessageFormatException,
    MessageSyntaxException,
    MissingArgumentException,
    Result,
    RetryExhaustedException,
    TranslationConfigurationException,
    TranslationLoadException,
)


class TestExceptions:
    def test_base_carries_code_and_context(self):
        exc = LingxException("boom", code="X_1", context={"k": "v"})
        assert exc.message == "boom"
        assert str(exc) == "boom"
        assert exc.code == "X_1"
        assert exc.context == {"k": "v"}

    def test_context_defaults_to_empty(self):
        assert LingxException("boom").context == {}

    def test_hierarchy(self):
        assert issubclass(MessageSyntaxException, MessageFormatException)
        assert issubclass(MissingArgumentException, MessageFormatException)
        assert issubclass(TranslationLoadException, InfrastructureException)
        assert issubclass(RetryExhaustedException, InfrastructureException)
        assert issubclass(TranslationConfigurationException, LingxException)

    def test_syntax_exception_position(self):
        exc = MessageSyntaxException("Expected '}'", 7, "{a, b")
        assert exc.position == 7
        assert exc.context["source"] == "{a, b"
        assert "position 7" in exc.message


class TestResult:
    def test_success(self):
        result = Result.success(42)
        assert result.ok
        assert result.value == 42
        assert result.error is None

    def test_recovered(self):
        error = PermissionError("blocked")
        result = Result.recovered(None, error)
        assert not result.ok
        assert result.value is None
        assert result.error is error
