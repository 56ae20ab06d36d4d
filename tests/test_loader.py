from pathlib import Path

import pytest

from surface_proto.errors import DocumentDecodeError
from surface_proto.surface.base import Kind, Position
from surface_proto.surface.loader import load_surface, package_name_for, surface_from_document

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadSurface:
    def test_load_widgets_counts(self):
        model = load_surface(FIXTURES / "widgets.yaml")
        assert len(model.types) == 4
        assert len(model.methods) == 3

    def test_load_field_attributes(self):
        model = load_surface(FIXTURES / "widgets.yaml")
        widget = model.find_type("Widget")
        labels = widget.fields[3]
        assert labels.kind == Kind.MAP
        assert labels.native_type == "map[string]string"
        assert widget.fields[2].enum_values == ["red", "green", "blue"]

    def test_load_positions(self):
        model = load_surface(FIXTURES / "widgets.yaml")
        params = model.find_type("GetWidgetParameters")
        assert params.fields[0].position == Position.PATH

    def test_load_json(self, tmp_path):
        f = tmp_path / "pets.json"
        f.write_text('{"types": [{"name": "Pet"}], "methods": []}')
        model = load_surface(f)
        assert model.types[0].name == "Pet"

    def test_empty_file_is_empty_model(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("")
        model = load_surface(f)
        assert model.types == []

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("types: [invalid\n")
        with pytest.raises(DocumentDecodeError):
            load_surface(f)


class TestSurfaceFromDocument:
    def test_rejects_non_mapping(self):
        with pytest.raises(DocumentDecodeError):
            surface_from_document(["not", "a", "mapping"])

    def test_rejects_invalid_kind(self):
        doc = {"types": [{"name": "Pet", "fields": [{"name": "x", "native_type": "string", "kind": "tuple"}]}]}
        with pytest.raises(DocumentDecodeError):
            surface_from_document(doc)


class TestPackageNameFor:
    def test_url_with_fragment(self):
        assert package_name_for("https://example.com/specs/pets.yaml#/components") == "pets"

    def test_plain_path(self):
        assert package_name_for("specs/owners.json") == "owners"

    def test_keeps_inner_dots(self):
        assert package_name_for("https://example.com/pets.v1.yaml") == "pets.v1"
