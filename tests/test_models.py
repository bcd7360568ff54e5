"""Tests for the pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from restwrap.models import ClientConfig, HTTPMethod, RequestOptions


class TestRequestOptions:
    def test_defaults(self) -> None:
        opts = RequestOptions()
        assert opts.method is HTTPMethod.GET
        assert opts.body is None
        assert opts.headers is None

    @pytest.mark.parametrize("raw", ["put", "Put", "PUT", HTTPMethod.PUT])
    def test_method_case_insensitive(self, raw) -> None:
        assert RequestOptions(method=raw).method is HTTPMethod.PUT

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            RequestOptions(query={"a": 1})

    def test_unsupported_method_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            RequestOptions(method="HEAD")


class TestHTTPMethod:
    def test_only_get_is_cacheable(self) -> None:
        assert not HTTPMethod.GET.is_mutating
        assert all(m.is_mutating for m in (HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.DELETE))


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig()
        assert config.cache_ttl == 300_000
        assert config.api_key_header == "X-API-Key"
        assert config.timeout == 30
        assert config.verify_ssl is True

    def test_assignment_validated(self) -> None:
        config = ClientConfig()
        with pytest.raises(PydanticValidationError):
            config.cache_ttl = -1
