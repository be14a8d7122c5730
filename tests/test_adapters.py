"""
Tests for the Flask and FastAPI integrations
"""

import pytest

import zigroute
from zigroute.location import Location, get_ambient_location


class TestFlask:
    @pytest.fixture
    def app(self, router):
        flask = pytest.importorskip("flask")
        from zigroute.adapters.flask import ZigrouteFlask

        app = flask.Flask(__name__)
        ZigrouteFlask(app, router)

        @app.route("/posts/<post>")
        def show(post):
            return router.current().name()

        @app.route("/link")
        def link():
            return flask.render_template_string("{{ route('posts.show', 4) }}|{{ current_route_name() }}")

        return app

    def test_current_route_inside_view(self, app):
        response = app.test_client().get("/posts/4?page=2")
        assert response.status_code == 200
        assert response.data == b"posts.show"

    def test_location_is_unbound_after_request(self, app):
        app.test_client().get("/posts/4")
        assert get_ambient_location() is None

    def test_template_globals(self, app):
        response = app.test_client().get("/link")
        assert response.data == b"/posts/4|None"

    def test_falls_back_to_current_router(self, blog_config):
        flask = pytest.importorskip("flask")
        from zigroute.adapters.flask import ZigrouteFlask

        zigroute.initialize(blog_config)
        app = flask.Flask(__name__)
        ZigrouteFlask(app)

        @app.route("/posts")
        def index():
            return flask.render_template_string("{{ current_route_name() }}:{{ route('pages.show', ['about']) }}")

        response = app.test_client().get("/posts")
        assert response.data == b"posts.index:/pages/about"


class TestFastAPI:
    @pytest.fixture
    def adapter(self):
        pytest.importorskip("fastapi")
        from zigroute.adapters import fastapi as adapter

        return adapter

    def test_location_from_scope(self, adapter):
        scope = {
            "type": "http",
            "scheme": "https",
            "path": "/posts/4",
            "query_string": b"page=2",
            "headers": [(b"host", b"www.example.com")],
        }
        assert adapter.location_from_scope(scope) == Location(
            host="www.example.com", pathname="/posts/4", search="?page=2"
        )

    def test_location_from_scope_without_host_header(self, adapter):
        scope = {
            "type": "http",
            "scheme": "http",
            "path": "/posts",
            "query_string": b"",
            "headers": [],
            "server": ("localhost", 8000),
        }
        assert adapter.location_from_scope(scope) == Location(host="localhost:8000", pathname="/posts", search="")

    def test_current_route_inside_endpoint(self, adapter, router):
        import fastapi
        from fastapi.testclient import TestClient

        app = fastapi.FastAPI()
        app.add_middleware(adapter.LocationMiddleware)

        @app.get("/posts/{post}")
        async def show(post: str):
            current = router.current()
            return {"name": current.name(), "params": router.current_params()}

        response = TestClient(app).get("/posts/hello-world?page=2")
        assert response.status_code == 200
        assert response.json() == {"name": "posts.show", "params": {"page": "2", "post": "hello-world"}}
        assert get_ambient_location() is None
