import pytest

from surface_proto.generator.context import RunContext
from surface_proto.surface.base import FieldDef, Kind, MethodDef, SurfaceModel, TypeDef


@pytest.fixture
def context():
    return RunContext()


@pytest.fixture
def widgets_model():
    """Widget / ListWidgetsResponse with a single GET method."""
    return SurfaceModel(
        types=[
            TypeDef(name="Widget", fields=[FieldDef(name="name", native_type="string")]),
            TypeDef(
                name="ListWidgetsResponse",
                description="ListWidgetsResponse holds parameters to ListWidgets",
                fields=[FieldDef(name="items", native_type="Widget", kind=Kind.ARRAY)],
            ),
        ],
        methods=[
            MethodDef(
                verb="GET",
                path="/widgets",
                handler_name="ListWidgets",
                responses_type_name="ListWidgetsResponse",
            )
        ],
    )
