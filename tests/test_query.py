import pytest

from commonsense.api.core.config import ClientConfig, Platform
from commonsense.api.core.query import (
    build_path,
    build_query,
    build_url,
    deserialize,
    prepare_request,
    serialize,
    tree_fields,
)


def test_defaults_apply_without_limit_or_page(config):
    assert build_query(config, {}) == {"limit": 10, "page": 1}
    assert build_query(config, None) == {"limit": 10, "page": 1}

    url, _ = build_url(config, "products")
    assert url == "https://api.example.org/v3/education/products?limit=10&page=1"


def test_limit_and_page_override_defaults(config):
    query = build_query(config, {"limit": 15, "page": 3})

    assert query["limit"] == 15
    assert query["page"] == 3


@pytest.mark.parametrize("bad", [0, -4, "abc", "", None, True, 2.5, "\u00b2", "\u00b3", "\u00bd"])
def test_invalid_limit_and_page_fall_back_to_defaults(config, bad):
    query = build_query(config, {"limit": bad, "page": bad})

    assert query["limit"] == 10
    assert query["page"] == 1


def test_numeric_strings_are_accepted_for_limit(config):
    assert build_query(config, {"limit": "25"})["limit"] == 25


def test_fields_list_is_comma_joined(config):
    query = build_query(config, {"fields": ["id", "title", "status"]})

    assert query["fields"] == "id,title,status"
    url, _ = build_url(config, "products", {"fields": ["id", "title"]})
    assert "fields=id%2Ctitle" in url


def test_fields_string_passes_through(config):
    assert build_query(config, {"fields": "hello,world"})["fields"] == "hello,world"


@pytest.mark.parametrize("options", [{}, {"fields": []}, {"fields": ""}, {"fields": None}])
def test_absent_or_empty_fields_never_reach_the_query(config, options):
    query = build_query(config, options)
    url, _ = build_url(config, "products", options)

    assert "fields" not in query
    assert "fields" not in url


def test_passthrough_filters_keep_order_and_join_lists(config):
    query = build_query(
        config,
        {"grades": ["k", 1, 2], "limit": 5, "status": 1, "free": True, "skip": None},
    )

    assert list(query) == ["limit", "page", "grades", "status", "free"]
    assert query["grades"] == "k,1,2"
    assert query["status"] == 1
    assert serialize({"free": query["free"]}) == "free=true"


def test_tree_is_local_only(config):
    options = {"tree": ["subjects", "grades"]}

    assert "tree" not in build_query(config, options)
    assert tree_fields(options) == ("subjects", "grades")
    assert tree_fields({"tree": "subjects, grades"}) == ("subjects", "grades")
    assert tree_fields({}) == ()


def test_query_placement_puts_identity_first(query_config):
    query = build_query(query_config, {"limit": 3})

    assert list(query) == ["clientId", "appId", "limit", "page"]
    assert query["clientId"] == "client-123"
    assert query["appId"] == "app-456"


def test_header_placement_keeps_identity_out_of_query(config):
    assert "clientId" not in build_query(config, {})


def test_calls_do_not_share_query_state(config):
    first = build_query(config, {"limit": 3, "fields": ["id"]})
    second = build_query(config, {})

    assert first["limit"] == 3
    assert second == {"limit": 10, "page": 1}


def test_build_url_is_deterministic(config):
    options = {"limit": 4, "fields": ["id", "title"], "q": "math & science"}

    assert build_url(config, "products", options) == build_url(config, "products", options)


@pytest.mark.parametrize(
    "host, path",
    [
        ("https://api.example.org", "products/123"),
        ("https://api.example.org/", "/products/123"),
        ("https://api.example.org//", "products/123/"),
        ("https://api.example.org", "//products//123"),
    ],
)
def test_build_path_normalizes_separators(credentials, host, path):
    config = ClientConfig(credentials=credentials, host=host, platform=Platform.MEDIA)

    assert build_path(config, path) == "https://api.example.org/v3/media/products/123"


def test_build_path_rejects_empty_path(config):
    with pytest.raises(ValueError):
        build_path(config, "/")


def test_serialize_matches_uri_component_encoding():
    assert serialize({"foo": "bar", "bar": "bats", "hello": "world"}) == "foo=bar&bar=bats&hello=world"
    assert serialize({"q": "a b&c=d", "x": "it's (ok)!*~"}) == "q=a%20b%26c%3Dd&x=it's%20(ok)!*~"


def test_serialize_deserialize_round_trip():
    mapping = {"q": "fractions & decimals", "fields": "id,title", "name": "über"}
    text = serialize(mapping)

    assert deserialize(text) == mapping
    assert serialize(deserialize(text)) == text
    assert deserialize("") == {}


def test_prepare_request_carries_headers_and_tree(config):
    prepared = prepare_request(config, "terms/12", {"tree": ["terms"], "limit": 50}, headers={"client-id": "c"})

    assert prepared.url == "https://api.example.org/v3/education/terms/12?limit=50&page=1"
    assert prepared.query == {"limit": 50, "page": 1}
    assert prepared.headers == {"client-id": "c"}
    assert prepared.tree_fields == ("terms",)
