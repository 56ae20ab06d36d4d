"""Surface model: the normalized API description fed to the compiler.

An upstream parser turns an API description (OpenAPI, discovery, ...) into
these models. The compiler only reads them.
"""

from enum import Enum

from pydantic import BaseModel, field_validator


class Kind(str, Enum):
    """How a field holds its value."""

    SCALAR = "SCALAR"
    ARRAY = "ARRAY"
    REFERENCE = "REFERENCE"
    MAP = "MAP"


class Position(str, Enum):
    """Where a request parameter travels in the HTTP request."""

    BODY = "BODY"
    HEADER = "HEADER"
    FORMDATA = "FORMDATA"
    QUERY = "QUERY"
    PATH = "PATH"


class FieldDef(BaseModel):
    """A single field of a surface type."""

    name: str
    native_type: str  # int32 / string / Pet / map[string]int32
    kind: Kind = Kind.SCALAR
    position: Position | None = None  # only meaningful on request parameter types
    enum_values: list[str] | None = None

    @field_validator("kind", "position", mode="before")
    @classmethod
    def _upper(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


class TypeDef(BaseModel):
    """A named type with ordered fields."""

    name: str
    description: str = ""
    fields: list[FieldDef] = []


class MethodDef(BaseModel):
    """A single API operation."""

    verb: str  # GET / POST / PUT / PATCH / DELETE
    path: str  # /pets/{petId}
    handler_name: str
    parameters_type_name: str = ""
    responses_type_name: str = ""


class SurfaceModel(BaseModel):
    """Types, methods and symbolic references of one API document."""

    types: list[TypeDef] = []
    methods: list[MethodDef] = []
    symbolic_references: list[str] = []

    def find_type(self, name: str) -> TypeDef | None:
        for t in self.types:
            if t.name == name:
                return t
        return None
