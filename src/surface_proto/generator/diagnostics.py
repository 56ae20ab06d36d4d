"""Non-fatal findings reported alongside a build result."""

from typing import Literal

from pydantic import BaseModel

HTTP_PROTO_DOC = "https://github.com/googleapis/googleapis/blob/master/google/api/http.proto"


class Diagnostic(BaseModel):
    """A policy problem found while building descriptors."""

    severity: Literal["warning", "info"] = "warning"
    code: str  # invalid-path-parameter / invalid-query-parameter / unsupported-map-value / unrecognized-verb
    type_name: str = ""
    field_name: str = ""
    message: str

    def __str__(self) -> str:
        return f"{self.severity}: [{self.code}] {self.message}"
