import json
from pathlib import Path

import pytest

from api_client_gen.parser.base import SpecLoadError, TypeKind
from api_client_gen.parser.rest_spec import parse_rest_spec, parse_type_kind

FIXTURES = Path(__file__).parent / "fixtures"


def _by_name(spec, name):
    return [e for e in spec.endpoints if e.name == name][0]


class TestParseTypeKind:
    def test_known_kinds(self):
        assert parse_type_kind("list") == TypeKind.LIST
        assert parse_type_kind("int") == TypeKind.INTEGER
        assert parse_type_kind("boolean") == TypeKind.BOOLEAN

    def test_union(self):
        assert parse_type_kind("number|string") == TypeKind.UNION

    def test_unknown(self):
        assert parse_type_kind("object") == TypeKind.UNKNOWN


class TestRestSpecParser:
    def test_parse_directory(self):
        spec = parse_rest_spec(FIXTURES / "rest-spec")
        assert len(spec.endpoints) == 7
        assert "_common" not in [e.name for e in spec.endpoints]

    def test_common_params(self):
        spec = parse_rest_spec(FIXTURES / "rest-spec")
        assert set(spec.common_params) == {"pretty", "human", "error_trace", "source", "filter_path"}
        assert spec.common_params["filter_path"].kind == TypeKind.LIST

    def test_parse_search(self):
        search = _by_name(parse_rest_spec(FIXTURES / "rest-spec"), "search")
        assert [p.path for p in search.paths] == ["/_search", "/{index}/_search", "/{index}/{type}/_search"]
        assert search.paths[0].methods == ["GET", "POST"]
        assert search.paths[1].parts["index"].kind == TypeKind.LIST
        assert search.doc_url == "https://opensearch.org/docs/latest/api-reference/search/"
        assert search.supports_body
        assert search.namespace is None

    def test_deprecated_path(self):
        search = _by_name(parse_rest_spec(FIXTURES / "rest-spec"), "search")
        assert search.paths[0].deprecated is None
        assert search.paths[2].deprecated == "7.0.0: Specifying types in urls has been deprecated"

    def test_enum_param(self):
        search = _by_name(parse_rest_spec(FIXTURES / "rest-spec"), "search")
        wildcards = search.params["expand_wildcards"]
        assert wildcards.kind == TypeKind.ENUM
        assert wildcards.options == ["open", "closed", "hidden", "none", "all"]
        assert wildcards.default == "open"

    def test_null_body(self):
        mapping = _by_name(parse_rest_spec(FIXTURES / "rest-spec"), "indices.get_mapping")
        assert not mapping.supports_body
        assert mapping.namespace == "indices"

    def test_stability(self):
        hot_threads = _by_name(parse_rest_spec(FIXTURES / "rest-spec"), "nodes.hot_threads")
        assert hot_threads.stability == "experimental"

    def test_single_file(self):
        spec = parse_rest_spec(FIXTURES / "rest-spec" / "get.json")
        assert [e.name for e in spec.endpoints] == ["get"]
        assert spec.common_params == {}

    def test_path_is_rooted(self, tmp_path):
        doc = {"ping": {"url": {"paths": [{"path": "_ping", "methods": ["head"]}]}}}
        f = tmp_path / "ping.json"
        f.write_text(json.dumps(doc))
        ping = parse_rest_spec(f).endpoints[0]
        assert ping.paths[0].path == "/_ping"
        assert ping.paths[0].methods == ["HEAD"]

    def test_yaml_file(self, tmp_path):
        f = tmp_path / "info.yaml"
        f.write_text("info:\n  url:\n    paths:\n      - path: /\n        methods: [GET]\n")
        assert parse_rest_spec(f).endpoints[0].name == "info"

    def test_invalid_json_raises(self, tmp_path):
        f = tmp_path / "bad.json"
        f.write_text("{not json")
        with pytest.raises(SpecLoadError):
            parse_rest_spec(f)

    def test_missing_url_raises(self, tmp_path):
        f = tmp_path / "bad.json"
        f.write_text(json.dumps({"search": {"params": {}}}))
        with pytest.raises(SpecLoadError, match="no url definition"):
            parse_rest_spec(f)
