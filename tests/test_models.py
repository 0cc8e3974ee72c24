from swagger_generate.config import Settings, load_settings
from swagger_generate.models import HandlerRef, Parameter, PathItem, RequestBody, RouteDescriptor


class TestHandlerRef:
    def test_parse_action(self):
        ref = HandlerRef.parse("App\\Http\\Controllers\\OrderItemController@store")
        assert ref.controller == "App\\Http\\Controllers\\OrderItemController"
        assert ref.method == "store"
        assert ref.resource_name == "OrderItem"

    def test_closure_has_no_handler(self):
        assert HandlerRef.parse("Closure") is None
        assert HandlerRef.parse("") is None

    def test_action_round_trip(self):
        action = "App\\Http\\Controllers\\UserController@show"
        assert HandlerRef.parse(action).action == action

    def test_dotted_controller_name(self):
        assert HandlerRef.parse("app.controllers.UserController@index").resource_name == "User"


class TestRouteDescriptor:
    def test_path_gets_leading_slash(self):
        route = RouteDescriptor(uri="api/users", methods=["GET"])
        assert route.path == "/api/users"
        assert route.handler is None
        assert route.middleware == []


class TestPathItem:
    def test_minimal_rendering(self):
        item = PathItem(tags=["Users"], summary="get user", responses={"200": {"description": "OK"}})
        assert item.to_openapi() == {
            "tags": ["Users"],
            "summary": "get user",
            "parameters": [],
            "responses": {"200": {"description": "OK"}},
        }

    def test_full_rendering(self):
        item = PathItem(
            tags=["Users"],
            summary="update user",
            parameters=[Parameter(name="user", location="path", required=True, schema_def={"type": "integer"})],
            responses={"200": {"description": "OK"}},
            request_body=RequestBody(content_type="multipart/form-data", schema_def={"type": "object"}),
            security=[{"bearerAuth": []}],
        )
        data = item.to_openapi()
        assert data["parameters"][0]["in"] == "path"
        assert data["requestBody"] == {"content": {"multipart/form-data": {"schema": {"type": "object"}}}}
        assert data["security"] == [{"bearerAuth": []}]


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("APP_URL", raising=False)
        settings = load_settings()
        assert settings == Settings()
        assert settings.docs_url == "http://localhost/docs.html"

    def test_precedence(self, monkeypatch):
        monkeypatch.setenv("APP_URL", "https://env.test")
        assert load_settings().server_url == "https://env.test"
        assert load_settings({"url": "https://manifest.test"}).server_url == "https://manifest.test"
        settings = load_settings({"url": "https://manifest.test"}, server_url="https://cli.test", title=None)
        assert settings.server_url == "https://cli.test"
        assert settings.title == "Documentation"

    def test_numeric_manifest_values_become_strings(self, monkeypatch):
        monkeypatch.delenv("APP_URL", raising=False)
        settings = load_settings({"title": "Shop", "version": 1.0})
        assert settings.version == "1.0"
