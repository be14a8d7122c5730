"""
Unit tests for Route: templates, parameter parsing, compilation and matching
"""

import pytest

from zigroute.config import RouteDefinition, RouterConfig
from zigroute.core.route import Route
from zigroute.core.template import ParameterSegment
from zigroute.errors import MissingBindingKey, MissingRequiredParameter


def make_route(uri, name="test", methods=("GET", "HEAD"), bindings=None, domain=None, **settings):
    definition = RouteDefinition(uri=uri, methods=list(methods), bindings=bindings or {}, domain=domain)
    config = RouterConfig(base_url="https://www.example.com", routes={name: definition}, **settings)
    return Route(name, definition, config)


class TestTemplate:
    def test_relative_template(self):
        assert make_route("test/{a}").template == "/test/{a}"

    def test_absolute_template(self):
        route = make_route("test/{a}", absolute=True)
        assert route.template == "https://www.example.com/test/{a}"

    def test_domain_overrides_base_domain(self):
        route = make_route("users/{user}", domain="{team}.example.com", absolute=True, base_port=8080)
        assert route.origin() == "https://{team}.example.com:8080"
        assert route.template == "https://{team}.example.com:8080/users/{user}"

    def test_origin_empty_when_relative(self):
        assert make_route("users", domain="api.example.com").origin() == ""

    def test_parameter_segments(self):
        route = make_route("team/{team}/user/{user?}")
        assert route.parameter_segments == [
            ParameterSegment("team", True),
            ParameterSegment("user", False),
        ]

    def test_name(self):
        assert make_route("posts", name="posts.index").name() == "posts.index"


class TestCompile:
    def test_route_without_parameters(self):
        route = make_route("test")
        assert route.compile() == "/test"
        assert route.compile(None) == "/test"

    def test_route_without_parameters_ignores_given_params(self):
        route = make_route("posts")
        assert route.compile({"page": 2}) == "/posts"
        assert route.compile(4) == "/posts"
        assert route.compile(["a", "b"], absolute=True) == "https://www.example.com/posts"

    def test_query_encoding_contract(self):
        route = make_route("test/{param1}/{param2}")
        result = route.compile({
            "param1": "param-1",
            "param2": "param-2",
            "q1": "a",
            "q2": "b",
            "arr": [1, 2, 3],
            "bool": True,
        })
        assert result == "/test/param-1/param-2?q1=a&q2=b&arr[0]=1&arr[1]=2&arr[2]=3&bool=1"

    def test_missing_required_parameter(self):
        route = make_route("posts/{post}", name="posts.show")
        with pytest.raises(MissingRequiredParameter) as exc_info:
            route.compile()

        assert exc_info.value.parameter == "post"
        assert exc_info.value.route == "posts.show"
        assert "'post' parameter is required for route 'posts.show'" in str(exc_info.value)

    def test_required_value_is_uri_encoded(self):
        assert make_route("posts/{post}").compile({"post": "hello world/2"}) == "/posts/hello%20world%2F2"

    def test_optional_segment_omitted(self):
        route = make_route("pages/{page?}")
        assert route.compile() == "/pages"
        assert route.compile({"page": "about"}) == "/pages/about"

    def test_optional_segment_in_the_middle_is_elided(self):
        route = make_route("docs/{version?}/intro")
        assert route.compile() == "/docs/intro"
        assert route.compile({"version": "v2"}) == "/docs/v2/intro"

    def test_scalar_parameter(self):
        assert make_route("posts/{post}").compile(4) == "/posts/4"

    def test_positional_parameters(self):
        route = make_route("events/{event}/venues/{venue}")
        assert route.compile(["Taylor", "Matt"]) == "/events/Taylor/venues/Matt"

    def test_positional_parameter_with_model(self):
        route = make_route("events/{event}/venues/{venue}")
        assert route.compile([4, {"id": 56789, "name": "Grand Canyon"}]) == "/events/4/venues/56789"

    def test_excess_positional_values_become_query_flags(self):
        assert make_route("posts/{post}").compile([4, "draft"]) == "/posts/4?draft="

    def test_model_binding(self):
        route = make_route("blog/{post}", bindings={"post": "slug"})
        params = {"post": {"id": 4, "slug": "hello-world", "title": "Hello, world!"}}
        assert route.substitute_bindings(params) == {"post": "hello-world"}
        assert route.compile(params) == "/blog/hello-world"

    def test_model_binding_falls_back_to_id(self):
        route = make_route("blog/{post}", bindings={"post": "slug"})
        assert route.compile({"post": {"id": 4}}) == "/blog/4"

    def test_missing_binding_key(self):
        route = make_route("blog/{post}", bindings={"post": "slug"})
        with pytest.raises(MissingBindingKey) as exc_info:
            route.compile({"post": {"title": "Hello"}})

        assert exc_info.value.parameter == "post"
        assert exc_info.value.key == "slug"

    def test_missing_binding_key_without_binding(self):
        with pytest.raises(MissingBindingKey) as exc_info:
            make_route("blog/{post}").compile({"post": {"title": "Hello"}})
        assert exc_info.value.key == "id"

    def test_bindings_leave_non_segment_values_alone(self):
        route = make_route("blog/{post}")
        params = {"post": 4, "filter": {"status": "open"}, "tags": ["a"]}
        assert route.substitute_bindings(params) == params

    def test_single_segment_inference(self):
        route = make_route("users/{user}")
        assert route.compile({"id": 56789, "name": "X"}) == "/users/56789"

    def test_single_segment_inference_with_binding_key(self):
        route = make_route("users/{user}", bindings={"user": "uuid"})
        assert route.compile({"uuid": "a1b2", "name": "X"}) == "/users/a1b2"

    def test_no_inference_when_segment_key_present(self):
        assert make_route("users/{user}").compile({"user": 5, "id": 3}) == "/users/5?id=3"

    def test_no_inference_without_model_keys(self):
        with pytest.raises(MissingRequiredParameter):
            make_route("users/{user}").compile({"name": "X"})

    def test_defaults_fill_segments(self):
        route = make_route("{locale}/posts/{post}", default_parameters={"locale": "en"})
        assert route.compile(4) == "/en/posts/4"
        assert route.compile([4]) == "/en/posts/4"
        assert route.compile({"locale": "fr", "post": 4}) == "/fr/posts/4"

    def test_defaults_do_not_block_single_segment_inference(self):
        route = make_route("{locale}/posts/{post}", default_parameters={"locale": "en"})
        assert route.compile({"id": 4, "title": "Hi"}) == "/en/posts/4"

    def test_boolean_query_values(self):
        route = make_route("posts/{post}")
        assert route.compile({"post": 1, "published": False, "pinned": True}) == "/posts/1?published=0&pinned=1"

    def test_none_query_values_are_omitted(self):
        assert make_route("posts/{post}").compile({"post": 1, "q": None}) == "/posts/1"

    def test_absolute_per_call(self):
        route = make_route("posts/{post}")
        assert route.compile(4, absolute=True) == "https://www.example.com/posts/4"

    def test_absolute_with_domain_segment(self):
        route = make_route("users/{user}", domain="{team}.example.com", absolute=True)
        assert route.compile({"team": "acme", "user": 7}) == "https://acme.example.com/users/7"

    def test_root_route(self):
        route = make_route("/")
        assert route.compile() == "/"
        assert route.matches_url("/")


class TestMatch:
    def test_only_get_routes_match(self):
        assert not make_route("posts", methods=["POST"]).matches_url("/posts")
        assert make_route("posts", methods=["GET"]).matches_url("/posts")

    def test_trailing_slash_is_ignored(self):
        assert make_route("posts/{post}").matches_url("/posts/4/")

    def test_query_is_ignored(self):
        assert make_route("posts/{post}").matches_url("/posts/4?page=2")

    def test_slash_before_query_is_not_stripped(self):
        assert not make_route("posts/{post}").matches_url("/posts/4/?page=2")

    def test_match_is_anchored(self):
        route = make_route("posts")
        assert not route.matches_url("/posts/4")
        assert not route.matches_url("/api/posts")

    def test_required_segment_cannot_be_empty(self):
        assert not make_route("posts/{post}").matches_url("/posts/")

    def test_literal_dots_are_not_wildcards(self):
        route = make_route("files/{name}.json")
        assert route.matches_url("/files/data.json")
        assert not route.matches_url("/files/dataxjson")

    def test_absolute_matching(self):
        route = make_route("posts/{post}", absolute=True)
        assert route.matches_url("www.example.com/posts/4")
        assert route.matches_url("https://www.example.com/posts/4")
        assert not route.matches_url("other.example.com/posts/4")

    def test_extract_params(self):
        route = make_route("pages/{page}/{section?}")
        assert route.extract_params("/pages/about/team") == {"page": "about", "section": "team"}
        assert route.extract_params("/pages/about") == {"page": "about", "section": None}
        assert route.extract_params("/pages/hello%20world") == {"page": "hello world", "section": None}
        assert route.extract_params("/other") == {}


ROUND_TRIP_CASES = [
    ("test", None),
    ("posts/{post}", 4),
    ("posts/{post}", {"post": "hello world", "page": 2}),
    ("pages/{page}/{section?}", {"page": "about"}),
    ("pages/{page}/{section?}", ["about", "team"]),
    ("docs/{version?}/intro", None),
    ("file-{name?}", {"name": "report"}),
    ("users/{user}", {"id": 56789, "name": "X"}),
]


@pytest.mark.parametrize("absolute", [False, True])
@pytest.mark.parametrize("uri,params", ROUND_TRIP_CASES)
def test_compiled_url_matches_its_route(uri, params, absolute):
    route = make_route(uri, absolute=absolute)
    assert route.matches_url(route.compile(params))
