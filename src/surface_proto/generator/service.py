"""Service builder — converts surface methods into an RPC service.

Every method is annotated with a `google.api.http` rule so the service can be
served through gRPC-HTTP transcoding.
"""

import re
from enum import Enum

from google.api import annotations_pb2
from google.api.http_pb2 import HttpRule
from google.protobuf.descriptor_pb2 import DescriptorProto, MethodOptions, ServiceDescriptorProto

from surface_proto.errors import ExtensionError
from surface_proto.generator.context import RunContext
from surface_proto.generator.diagnostics import Diagnostic
from surface_proto.generator.foundation import EMPTY_TYPE
from surface_proto.surface.base import MethodDef, Position, SurfaceModel

SERVICE_SUFFIX = "Service"


class HttpVerb(str, Enum):
    """HTTP verbs with a dedicated HttpRule pattern."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def title_case(package: str) -> str:
    """Upper-case the first letter of every word; the rest is left untouched.

    'pets' -> 'Pets', 'my_api' -> 'My_api', 'pet.store' -> 'Pet.Store'
    """
    return re.sub(r"(?<!\w)\w", lambda m: m.group(0).upper(), package)


def find_service_name(messages: list[DescriptorProto], base: str) -> str:
    """Return `base`, or the first of `<base>Service`, `<base>Service1`, ...
    that no message in the file is already called."""
    taken = {m.name for m in messages}
    name = base
    counter = 0
    while name in taken:
        name = base + SERVICE_SUFFIX
        if counter > 0:
            name += str(counter)
        counter += 1
    return name


def request_body_field(parameters_type_name: str, model: SurfaceModel) -> str | None:
    """Name of the BODY field of the method's parameter type, if any."""
    type_def = model.find_type(parameters_type_name)
    if type_def is None:
        return None
    for field in type_def.fields:
        if field.position == Position.BODY:
            return field.name
    return None


def http_verb(method: MethodDef) -> HttpVerb | None:
    try:
        return HttpVerb(method.verb.upper())
    except ValueError:
        return None


def http_rule_for(method: MethodDef, body: str | None) -> HttpRule:
    """HttpRule for `method`. The pattern stays unset for unrecognized verbs."""
    rule = HttpRule()
    verb = http_verb(method)
    if verb is not None:
        setattr(rule, verb.value.lower(), method.path)
    if body:
        rule.body = body
    return rule


def build_service(
    model: SurfaceModel,
    package: str,
    messages: list[DescriptorProto],
    context: RunContext,
    diagnostics: list[Diagnostic],
) -> tuple[ServiceDescriptorProto, bool]:
    """Build the file's single service.

    Returns the service and whether any method fell back to google.protobuf.Empty.
    """
    service = ServiceDescriptorProto(name=find_service_name(messages, title_case(package)))
    uses_empty = False

    for method in model.methods:
        body = request_body_field(method.parameters_type_name, model)
        rule = http_rule_for(method, body)
        if http_verb(method) is None:
            diagnostics.append(
                Diagnostic(
                    code="unrecognized-verb",
                    type_name=service.name,
                    field_name=method.handler_name,
                    message=(
                        f"Method {method.handler_name} uses HTTP verb {method.verb!r}, "
                        "which has no transcoding pattern; an empty rule was attached."
                    ),
                )
            )

        options = MethodOptions()
        _attach_http_rule(options, rule, method)

        input_type = EMPTY_TYPE
        if method.parameters_type_name:
            input_type = context.qualified_name(method.parameters_type_name, package)
        output_type = EMPTY_TYPE
        if method.responses_type_name:
            output_type = context.qualified_name(method.responses_type_name, package)
        if EMPTY_TYPE in (input_type, output_type):
            uses_empty = True

        service.method.add(
            name=method.handler_name,
            input_type=input_type,
            output_type=output_type,
            options=options,
        )
    return service, uses_empty


def _attach_http_rule(options: MethodOptions, rule: HttpRule, method: MethodDef) -> None:
    try:
        extension = options.Extensions[annotations_pb2.http]
        extension.CopyFrom(rule)
        extension.SetInParent()
    except (KeyError, TypeError, ValueError) as e:
        raise ExtensionError(
            f"Could not attach HTTP rule to method {method.handler_name}: {e}"
        ) from e
