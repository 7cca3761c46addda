"""Unit tests for URL building."""

import datetime
from fractions import Fraction
from http import HTTPStatus
from pathlib import PurePosixPath
from types import SimpleNamespace

import pytest

from pathcat.buffer import BufferPool
from pathcat.builder import build_url
from pathcat.config import (
    ArrayFormat,
    BooleanFormat,
    ObjectAccessorFormat,
    PathCatConfig,
    PropertyNameFormat,
)
from pathcat.exceptions import BufferOverflowError, InvalidTemplateError
from pathcat.types import ParameterMap


class TestBuildUrl:
    """Test suite for build_url."""

    def test_placeholder_and_query(self):
        """Test path substitution with the rest as query."""
        result = build_url("/users/:id", {"id": 123, "filter": "active"})

        assert result == "/users/123?filter=active"

    def test_dictionary(self):
        result = build_url("/:id", {"id": 123, "foo": "bar"})

        assert result == "/123?foo=bar"

    def test_object_with_sequences_and_booleans(self):
        """Test an ad-hoc object with multiple placeholders."""
        params = SimpleNamespace(
            user_id="123",
            post_id=456,
            cool_flag=True,
            fields=["title", "body"],
        )
        result = build_url("/users/:user_id/posts/:post_id", params)

        assert result == "/users/123/posts/456?cool_flag=True&fields=title&fields=body"

    def test_dataclass_with_nested(self, request_params):
        result = build_url("/api/:version/resource/:id", request_params)

        assert result == "/api/v1/resource/789?filter=active&nested.sub_filter=sub&nested.depth=2"

    def test_nested_mapping(self):
        result = build_url(
            "/api/:version/resource/:id",
            {"version": "v2", "id": 789, "nested": {"sub": "subValue", "depth": 3}},
        )

        assert result == "/api/v2/resource/789?nested.sub=subValue&nested.depth=3"

    def test_enum(self):
        assert build_url("/status/:code", {"code": HTTPStatus.OK}) == "/status/OK"

    def test_none_parameters_returns_template(self):
        assert build_url("/api/resource", None) == "/api/resource"

    @pytest.mark.parametrize(
        "template",
        ["/", "/users/:id", "https://example.com:8443/a/:b?x=1", ""],
    )
    def test_no_parameters_passthrough(self, template):
        """Test templates pass through unchanged without parameters."""
        assert build_url(template) == template

    def test_list_repeat_key(self):
        assert build_url("/items", {"ids": [1, 2, 3]}) == "/items?ids=1&ids=2&ids=3"

    def test_mixed_parameters(self):
        result = build_url(
            "/search",
            {"query": "test", "page": 2, "filters": {"category": "books", "price": "cheap"}},
        )

        assert result == "/search?query=test&page=2&filters.category=books&filters.price=cheap"

    def test_invalid_template(self):
        with pytest.raises(InvalidTemplateError) as exc_info:
            build_url("not a valid url", None)

        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.template == "not a valid url"

    def test_invalid_template_checked_before_flattening(self):
        """Test parameters are never touched for a rejected template."""

        class Exploding:
            @property
            def value(self):
                raise AssertionError("flattened")

        with pytest.raises(InvalidTemplateError):
            build_url("/bad path", Exploding())


class TestBooleanFormats:
    """Test boolean formats in the query string."""

    @pytest.mark.parametrize(
        "fmt,expected",
        [
            (BooleanFormat.DEFAULT, "/api?flag=True"),
            (BooleanFormat.LOWERCASE, "/api?flag=true"),
            (BooleanFormat.NUMERIC, "/api?flag=1"),
            (BooleanFormat.ON_OFF, "/api?flag=on"),
        ],
    )
    def test_boolean_format(self, fmt, expected):
        assert build_url("/api", {"flag": True}, PathCatConfig(boolean_format=fmt)) == expected

    def test_boolean_placeholder(self):
        config = PathCatConfig(boolean_format=BooleanFormat.ON_OFF)

        assert build_url("/flags/:enabled", {"enabled": False}, config) == "/flags/off"


class TestNamingFormats:
    """Test property name and accessor formats."""

    def test_camel_case(self):
        config = PathCatConfig(property_name_format=PropertyNameFormat.CAMEL_CASE)
        result = build_url("/api", SimpleNamespace(UserName="John", IsAdmin=True), config)

        assert result == "/api?userName=John&isAdmin=True"

    def test_snake_case(self):
        config = PathCatConfig(property_name_format=PropertyNameFormat.SNAKE_CASE)
        result = build_url("/api", SimpleNamespace(UserName="John", IsAdmin=True), config)

        assert result == "/api?user_name=John&is_admin=True"

    def test_index_brackets(self):
        config = PathCatConfig(object_accessor_format=ObjectAccessorFormat.INDEX_BRACKETS)
        params = SimpleNamespace(User=SimpleNamespace(Name="John", Age=30))

        assert build_url("/api", params, config) == "/api?User[Name]=John&User[Age]=30"

    def test_omit_parent(self):
        config = PathCatConfig(object_accessor_format=ObjectAccessorFormat.OMIT_PARENT)
        params = {"user": {"name": "Alice", "age": 30}}

        assert build_url("/api", params, config) == "/api?name=Alice&age=30"

    def test_omit_parent_preserves_case(self):
        config = PathCatConfig(object_accessor_format=ObjectAccessorFormat.OMIT_PARENT)
        params = SimpleNamespace(User=SimpleNamespace(Name="John", Age=30))

        assert build_url("/api", params, config) == "/api?Name=John&Age=30"


class TestArrayFormats:
    """Test array serialization."""

    def test_indexed(self):
        config = PathCatConfig(array_format=ArrayFormat.INDEXED)
        result = build_url("/api", {"items": ["a", "b", "c"]}, config)

        assert result == "/api?items[0]=a&items[1]=b&items[2]=c"

    def test_delimited(self):
        config = PathCatConfig(array_format=ArrayFormat.DELIMITED, array_delimiter="|")
        result = build_url("/api", {"items": ["a", "b", "c"]}, config)

        assert result == "/api?items=a|b|c"

    def test_empty_sequence(self):
        """Test empty sequences emit nothing, or an empty value when delimited."""
        assert build_url("/api", {"items": [], "q": 1}) == "/api?q=1"
        config = PathCatConfig(array_format=ArrayFormat.DELIMITED)
        assert build_url("/api", {"items": []}, config) == "/api?items="

    def test_elements_use_default_string_form(self):
        config = PathCatConfig(boolean_format=BooleanFormat.NUMERIC)
        result = build_url("/api", {"values": [True, None, 1.5]}, config)

        assert result == "/api?values=True&values=&values=1.5"

    def test_combined_configuration(self):
        config = PathCatConfig(
            boolean_format=BooleanFormat.ON_OFF,
            property_name_format=PropertyNameFormat.CAMEL_CASE,
            object_accessor_format=ObjectAccessorFormat.INDEX_BRACKETS,
            array_format=ArrayFormat.DELIMITED,
            array_delimiter=",",
        )
        params = SimpleNamespace(
            UserName="John",
            IsAdmin=True,
            Preferences=SimpleNamespace(Theme="dark", ShowNotifications=True),
            Roles=["user", "editor"],
        )

        assert build_url("/api", params, config) == (
            "/api?userName=John&isAdmin=on&preferences[theme]=dark"
            "&preferences[showNotifications]=on&roles=user,editor"
        )


class TestPlaceholders:
    """Test placeholder substitution details."""

    def test_flat_mapping_query_round_trip(self):
        """Test unmatched flat entries become the query string in order."""
        params = {"b": 2, "a": "x", "c": 3.5}
        expected = "/path/:none?" + "&".join(f"{k}={v}" for k, v in params.items())

        assert build_url("/path/:none", params) == expected

    def test_consumed_key_not_repeated_in_query(self):
        result = build_url("/users/:id/:id", {"id": 7, "q": "x"})

        assert result == "/users/7/:id?q=x"

    def test_empty_value_leaves_token_and_stays_in_query(self):
        """Test empty substitution values are not spliced and remain query parameters."""
        result = build_url("/users/:id", {"id": "", "q": "x"})

        assert result == "/users/:id?id=&q=x"

    def test_none_value_in_flat_mapping(self):
        assert build_url("/users/:id", {"id": None}) == "/users/:id?id="

    def test_unknown_placeholder_left_alone(self):
        assert build_url("/users/:missing", {"q": 1}) == "/users/:missing?q=1"

    def test_case_insensitive_lookup(self):
        assert build_url("/users/:UserId", {"userid": 5}) == "/users/5"

    def test_query_keeps_parameter_case(self):
        assert build_url("/x", {"UserId": 5}) == "/x?UserId=5"

    def test_inserted_text_not_rescanned(self):
        result = build_url("/x/:id", {"id": ":b", "b": "no"})

        assert result == "/x/:b?b=no"

    def test_placeholder_name_stops_at_non_word(self):
        result = build_url("/files/:name.json", {"name": "report"})

        assert result == "/files/report.json"

    def test_placeholder_shrink_and_grow(self):
        result = build_url(
            "/:a/:long_name/end",
            {"a": "expanded-value", "long_name": "s"},
        )

        assert result == "/expanded-value/s/end"

    def test_absolute_url_with_port(self):
        result = build_url("http://localhost:8080/users/:id", {"id": 1})

        assert result == "http://localhost:8080/users/1"

    def test_sequence_bound_to_placeholder_uses_str(self):
        assert build_url("/tags/:tags", {"tags": ["a", "b"]}) == "/tags/['a', 'b']"

    def test_date_value(self):
        result = build_url("/reports/:day", {"day": datetime.date(2024, 3, 1)})

        assert result == "/reports/2024-03-01"

    def test_parameter_map_input(self):
        params = ParameterMap({"ID": 1, "tag": "x"})

        assert build_url("/:id", params) == "/1?tag=x"

    def test_other_numeric_types(self):
        """Test any number renders through its string form."""
        result = build_url("/a", {"ratio": Fraction(1, 2), "z": 1 + 2j})

        assert result == "/a?ratio=1/2&z=(1+2j)"

    def test_fraction_in_object(self):
        result = build_url("/a/:ratio", SimpleNamespace(ratio=Fraction(3, 4)))

        assert result == "/a/3/4"

    def test_path_values(self):
        """Test path-like values render as file system paths."""
        result = build_url(
            "/f",
            {"file": PurePosixPath("/tmp/a.txt"), "files": [PurePosixPath("b/c")]},
        )

        assert result == "/f?file=/tmp/a.txt&files=b/c"

    def test_root_path_in_object(self):
        result = build_url("/f", SimpleNamespace(root=PurePosixPath("/")))

        assert result == "/f?root=/"

    def test_self_referencing_object(self):
        """Test fields leading back to an enclosing object are skipped."""
        node = SimpleNamespace(name="a")
        node.me = node

        assert build_url("/n", node) == "/n?name=a"

    def test_unicode_preserved(self):
        result = build_url("/cities/:city", {"city": "Санкт-Петербург", "code": 812})

        assert result == "/cities/Санкт-Петербург?code=812"


class TestBufferCapacity:
    """Test buffer overflow handling."""

    def test_overflow_in_query(self, small_pool):
        config = PathCatConfig(buffer_size=16)

        with pytest.raises(BufferOverflowError) as exc_info:
            build_url("/api", {"query": "something-long"}, config, pool=small_pool)

        assert exc_info.value.capacity == 16

    def test_overflow_in_template(self):
        with pytest.raises(BufferOverflowError):
            build_url("/a-rather-long-template", None, PathCatConfig(buffer_size=8))

    def test_overflow_in_substitution(self):
        config = PathCatConfig(buffer_size=12)

        with pytest.raises(BufferOverflowError):
            build_url("/u/:id", {"id": "x" * 20}, config)

    def test_exact_fit(self):
        config = PathCatConfig(buffer_size=8)

        assert build_url("/u/:id", {"id": 1, "a": 2}, config) == "/u/1?a=2"

    def test_larger_capacity_succeeds(self):
        value = "v" * 3000
        config = PathCatConfig(buffer_size=4096)

        assert build_url("/x", {"q": value}, config) == f"/x?q={value}"

    def test_default_capacity_overflow(self):
        with pytest.raises(BufferOverflowError):
            build_url("/x", {"q": "v" * 3000})

    def test_pool_reused_after_overflow(self):
        pool = BufferPool(capacity=16)
        config = PathCatConfig(buffer_size=16)

        with pytest.raises(BufferOverflowError):
            build_url("/api", {"q": "x" * 30}, config, pool=pool)

        assert build_url("/api", {"q": "ok"}, config, pool=pool) == "/api?q=ok"
        assert pool.idle_count == 1
