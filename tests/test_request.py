import ast

import pytest

from api_client_gen.generator.errors import UnsupportedMethodsError
from api_client_gen.generator.parts import build_parts_enum
from api_client_gen.generator.request import endpoint_methods, method_expr, render_request_builder, setter_name
from api_client_gen.parser.base import ApiEndpoint, ParamType, TypeKind, UrlPath


def _endpoint(name: str, *paths: tuple[str, list[str]], **kwargs) -> ApiEndpoint:
    url_paths = [
        UrlPath(path=p, methods=m, parts={"index": ParamType(kind=TypeKind.LIST)} if "{index}" in p else {})
        for p, m in paths
    ]
    return ApiEndpoint(name=name, paths=url_paths, **kwargs)


def _render(endpoint: ApiEndpoint, common_params=None) -> str:
    stmts = render_request_builder(endpoint, build_parts_enum(endpoint), common_params)
    module = ast.Module(body=stmts, type_ignores=[])
    ast.fix_missing_locations(module)
    return ast.unparse(module)


class TestMethods:
    def test_methods_in_first_seen_order(self):
        endpoint = _endpoint("index", ("/{index}/_doc", ["POST"]), ("/{index}/_doc/x", ["PUT", "POST"]))
        assert endpoint_methods(endpoint) == ["POST", "PUT"]

    def test_single_method(self):
        assert method_expr("Get", ["GET"]) == "'GET'"

    def test_put_post_with_put_in_name(self):
        assert method_expr("IndicesPutMapping", ["PUT", "POST"]) == "'PUT'"

    def test_put_post_without_put_in_name(self):
        assert method_expr("Index", ["PUT", "POST"]) == "'POST'"

    def test_get_post_depends_on_body(self):
        assert method_expr("Search", ["POST", "GET"]) == "'POST' if self._body is not None else 'GET'"

    def test_other_combination_raises(self):
        with pytest.raises(UnsupportedMethodsError, match="Unexpected combination of methods: GET, DELETE"):
            method_expr("Thing", ["GET", "DELETE"])


class TestSetterName:
    def test_plain(self):
        assert setter_name("q") == "q"

    def test_keyword(self):
        assert setter_name("from") == "from_"

    def test_builder_method_names(self):
        assert setter_name("body") == "body_"
        assert setter_name("build") == "build_"


class TestRenderRequestBuilder:
    def test_parameterless_endpoint_takes_no_parts(self):
        source = _render(_endpoint("info", ("/", ["GET"])))
        assert "def __init__(self) -> None:" in source
        assert "self._parts = InfoPartsNone()" in source

    def test_endpoint_with_parts(self):
        source = _render(_endpoint("search", ("/_search", ["GET", "POST"]), ("/{index}/_search", ["GET", "POST"])))
        assert "def __init__(self, parts: SearchParts) -> None:" in source

    def test_body_setter_only_with_body(self):
        with_body = _render(_endpoint("search", ("/_search", ["GET", "POST"]), body={"description": "query"}))
        without_body = _render(_endpoint("info", ("/", ["GET"])))
        assert "def body(self, body: Any)" in with_body
        assert "def body(" not in without_body

    def test_params_and_common_params(self):
        endpoint = _endpoint(
            "search",
            ("/_search", ["GET"]),
            params={
                "from": ParamType(kind=TypeKind.NUMBER, description="Starting offset"),
                "expand_wildcards": ParamType(kind=TypeKind.ENUM, options=["open", "all"]),
            },
        )
        source = _render(endpoint, {"pretty": ParamType(kind=TypeKind.BOOLEAN)})
        assert "def from_(self, from_: int) -> 'Search':" in source
        assert "self._params['from'] = from_" in source
        assert "Starting offset" in source
        assert "def expand_wildcards(self, expand_wildcards: Literal['open', 'all']) -> 'Search':" in source
        assert "def pretty(self, pretty: bool) -> 'Search':" in source

    def test_endpoint_param_overrides_common(self):
        endpoint = _endpoint("search", ("/_search", ["GET"]), params={"source": ParamType(kind=TypeKind.LIST)})
        source = _render(endpoint, {"source": ParamType(kind=TypeKind.STRING)})
        assert "def source(self, source: Sequence[str])" in source

    def test_docstring_links_documentation(self):
        endpoint = _endpoint(
            "search",
            ("/_search", ["GET"]),
            doc_url="https://opensearch.org/docs/latest/api-reference/search/",
            description="Returns results matching a query.",
        )
        source = _render(endpoint)
        assert "Builder for the [Search API](https://opensearch.org/docs/latest/api-reference/search/)" in source
        assert "Returns results matching a query." in source

    def test_build_returns_request(self):
        source = _render(_endpoint("get", ("/{index}", ["GET"])))
        assert "return Request('GET', self._parts.url(), dict(self._params), self._body)" in source

    def test_unsupported_methods_raise(self):
        with pytest.raises(UnsupportedMethodsError):
            _render(_endpoint("delete", ("/{index}", ["DELETE", "GET"])))
