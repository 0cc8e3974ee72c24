from pathlib import Path

import pytest

from swagger_generate.config import Settings
from swagger_generate.exceptions import ManifestError
from swagger_generate.manifest.loader import ManifestResolver, filter_api_routes, load_manifest
from swagger_generate.models import HandlerRef

FIXTURES = Path(__file__).parent / "fixtures"
CONTROLLER = "App\\Http\\Controllers\\OrderController"


@pytest.fixture
def manifest():
    return load_manifest(FIXTURES / "routes.yaml")


@pytest.fixture
def resolver(manifest):
    return ManifestResolver(manifest, FIXTURES)


class TestLoadManifest:
    def test_routes_loaded_in_order(self, manifest):
        assert len(manifest.routes) == 8
        assert manifest.routes[0].action == f"{CONTROLLER}@index"
        assert manifest.routes[0].methods == ["GET", "HEAD"]

    def test_app_block(self, manifest):
        assert manifest.app["title"] == "Shop API"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="Cannot read manifest"):
            load_manifest(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("routes: [invalid\n")
        with pytest.raises(ManifestError, match="Invalid YAML"):
            load_manifest(f)

    def test_non_mapping(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(ManifestError):
            load_manifest(f)

    def test_invalid_route(self, tmp_path):
        f = tmp_path / "route.yaml"
        f.write_text("routes:\n  - methods: [GET]\n")
        with pytest.raises(ManifestError):
            load_manifest(f)

    def test_unknown_validator(self, tmp_path):
        f = tmp_path / "ref.yaml"
        f.write_text("handlers:\n  A@b:\n    validation: Missing\n")
        with pytest.raises(ManifestError, match="unknown validator"):
            load_manifest(f)

    def test_unknown_heuristic(self, tmp_path):
        f = tmp_path / "heur.yaml"
        f.write_text("heuristics:\n  bogus: x\n")
        with pytest.raises(ManifestError):
            load_manifest(f)

    def test_invalid_heuristic_regex(self, tmp_path):
        f = tmp_path / "regex.yaml"
        f.write_text("heuristics:\n  abort: 'abort\\(('\n")
        with pytest.raises(ManifestError, match="invalid heuristic pattern"):
            load_manifest(f)

    def test_list_example(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text(
            "validators:\n"
            "  BulkRequest:\n"
            "    rules:\n"
            "      name: required\n"
            "    example:\n"
            "      - name: a\n"
            "      - name: b\n"
        )
        manifest = load_manifest(f)
        assert manifest.validators["BulkRequest"].example == [{"name": "a"}, {"name": "b"}]

    def test_empty_file(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("")
        assert load_manifest(f).routes == []


class TestFilterApiRoutes:
    def test_keeps_only_api_controller_routes(self, manifest):
        routes = filter_api_routes(manifest.routes, Settings())
        assert [r.action for r in routes] == [
            f"{CONTROLLER}@index",
            f"{CONTROLLER}@store",
            f"{CONTROLLER}@show",
            f"{CONTROLLER}@update",
            f"{CONTROLLER}@destroy",
        ]

    def test_custom_namespace(self, manifest):
        routes = filter_api_routes(manifest.routes, Settings(controller_namespace="Vendor\\"))
        assert [r.path for r in routes] == ["/api/vendor"]


class TestManifestResolver:
    def test_named_validator(self, resolver):
        descriptor = resolver.validation_for(HandlerRef.parse(f"{CONTROLLER}@store"))
        assert "items.*.sku" in descriptor.rules
        assert descriptor.example["customer_email"] == "jane@example.com"

    def test_no_validator(self, resolver):
        assert resolver.validation_for(HandlerRef.parse(f"{CONTROLLER}@show")) is None

    def test_unknown_handler(self, resolver):
        handler = HandlerRef.parse("App\\Http\\Controllers\\X@y")
        assert resolver.validation_for(handler) is None
        assert resolver.source_for(handler) == ""

    def test_source_span(self, resolver):
        source = resolver.source_for(HandlerRef.parse(f"{CONTROLLER}@store"))
        assert source.startswith("    public function store(")
        assert "response()->json($order, 201)" in source
        assert "function show" not in source

    def test_inline_code_and_validation(self, tmp_path):
        f = tmp_path / "inline.yaml"
        f.write_text(
            "handlers:\n"
            "  A@b:\n"
            "    code: abort(409);\n"
            "    validation:\n"
            "      rules:\n"
            "        name: required\n"
        )
        resolver = ManifestResolver(load_manifest(f), tmp_path)
        handler = HandlerRef.parse("A@b")
        assert resolver.source_for(handler) == "abort(409);"
        assert resolver.validation_for(handler).rules == {"name": "required"}

    def test_whole_file_without_lines(self, tmp_path):
        (tmp_path / "h.php").write_text("line1\nline2\n")
        f = tmp_path / "m.yaml"
        f.write_text("handlers:\n  A@b:\n    source: h.php\n")
        resolver = ManifestResolver(load_manifest(f), tmp_path)
        assert resolver.source_for(HandlerRef.parse("A@b")) == "line1\nline2\n"

    def test_missing_source_is_fatal(self, tmp_path):
        f = tmp_path / "m.yaml"
        f.write_text("handlers:\n  A@b:\n    source: missing.php\n")
        resolver = ManifestResolver(load_manifest(f), tmp_path)
        with pytest.raises(ManifestError, match="Cannot read handler source"):
            resolver.source_for(HandlerRef.parse("A@b"))
