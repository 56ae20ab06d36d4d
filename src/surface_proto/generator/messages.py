"""Message builder — converts surface types into protobuf message descriptors."""

from google.protobuf.descriptor_pb2 import (
    DescriptorProto,
    EnumDescriptorProto,
    FieldDescriptorProto,
)

from surface_proto.generator.context import RunContext
from surface_proto.generator.diagnostics import HTTP_PROTO_DOC, Diagnostic
from surface_proto.generator.types import field_type, is_scalar
from surface_proto.surface.base import FieldDef, Kind, Position, SurfaceModel, TypeDef

MAP_PREFIX = "map[string]"
UNSUPPORTED_MAP_PREFIX = "map[string][]"


def is_request_parameter(type_def: TypeDef) -> bool:
    """Whether `type_def` is the request parameter type of some method.

    The surface model carries no structural marker for this, so the type is
    recognized by the description the upstream parser writes for it.
    """
    return f"{type_def.name} holds parameters to" in type_def.description


def check_parameter_field(type_def: TypeDef, field: FieldDef) -> Diagnostic | None:
    """Check that a path or query parameter can be bound by an HTTP rule."""
    if field.position == Position.PATH and field.kind != Kind.SCALAR:
        return Diagnostic(
            code="invalid-path-parameter",
            type_name=type_def.name,
            field_name=field.name,
            message=(
                f"The path parameter {field.name} of {type_def.name} is invalid. "
                "The path template may refer to one or more fields in the gRPC request "
                "message, as long as each field is a non-repeated field with a primitive "
                f"(non-message) type. See {HTTP_PROTO_DOC} for more information."
            ),
        )
    if field.position == Position.QUERY:
        valid = (
            field.kind == Kind.SCALAR
            or (field.kind == Kind.ARRAY and is_scalar(field.native_type))
            or field.kind == Kind.REFERENCE
        )
        if not valid:
            return Diagnostic(
                code="invalid-query-parameter",
                type_name=type_def.name,
                field_name=field.name,
                message=(
                    f"The query parameter {field.name} of {type_def.name} is invalid. "
                    "Fields mapped to URL query parameters must have a primitive type, "
                    "a repeated primitive type or a non-repeated message type. "
                    f"See {HTTP_PROTO_DOC} for more information."
                ),
            )
    return None


def build_messages(
    model: SurfaceModel,
    package: str,
    context: RunContext,
    diagnostics: list[Diagnostic],
) -> list[DescriptorProto]:
    """Build one message per surface type, registering each qualified name."""
    messages = []
    for type_def in model.types:
        messages.append(_build_message(type_def, package, context, diagnostics))
        context.register_message(type_def.name, package)
    return messages


def _build_message(
    type_def: TypeDef,
    package: str,
    context: RunContext,
    diagnostics: list[Diagnostic],
) -> DescriptorProto:
    message = DescriptorProto(name=type_def.name)
    request_parameter = is_request_parameter(type_def)

    for field in type_def.fields:
        if request_parameter:
            problem = check_parameter_field(type_def, field)
            if problem:
                diagnostics.append(problem)

        if field.kind == Kind.MAP and field.native_type.startswith(UNSUPPORTED_MAP_PREFIX):
            diagnostics.append(
                Diagnostic(
                    severity="info",
                    code="unsupported-map-value",
                    type_name=type_def.name,
                    field_name=field.name,
                    message=(
                        f"Field {field.name} of {type_def.name} is a map of arrays "
                        f"({field.native_type}) and was omitted."
                    ),
                )
            )
            continue

        if field.enum_values:
            message.enum_type.append(_build_enum(field))

        # Numbers stay contiguous over the fields actually emitted.
        descriptor = message.field.add(
            name=field.name,
            number=len(message.field) + 1,
            label=_label_for(field),
        )
        if field.kind == Kind.MAP:
            entry = _build_map_entry(field, package, context)
            descriptor.type = FieldDescriptorProto.TYPE_MESSAGE
            descriptor.type_name = entry.name
            message.nested_type.append(entry)
        else:
            descriptor.type = field_type(field.native_type, field.enum_values)
            _set_type_name(descriptor, field.native_type, package, context)
    return message


def _label_for(field: FieldDef) -> int:
    if field.kind == Kind.ARRAY or field.native_type.startswith("map["):
        return FieldDescriptorProto.LABEL_REPEATED
    return FieldDescriptorProto.LABEL_OPTIONAL


def _set_type_name(
    descriptor: FieldDescriptorProto,
    native_type: str,
    package: str,
    context: RunContext,
) -> None:
    # Message references are package-qualified unless an earlier build
    # (possibly of another document) already generated the type.
    if descriptor.type == FieldDescriptorProto.TYPE_MESSAGE:
        descriptor.type_name = context.qualified_name(native_type, package)
    elif descriptor.type == FieldDescriptorProto.TYPE_ENUM:
        descriptor.type_name = native_type


def _build_enum(field: FieldDef) -> EnumDescriptorProto:
    # Map fields carry the literals of their value type.
    name = field.native_type
    if field.kind == Kind.MAP:
        name = name[len(MAP_PREFIX):]
    enum = EnumDescriptorProto(name=name)
    for number, literal in enumerate(field.enum_values):
        enum.value.add(name=literal.upper(), number=number)
    return enum


def _build_map_entry(field: FieldDef, package: str, context: RunContext) -> DescriptorProto:
    """Nested `<FieldName>Entry` message holding the map's key and value."""
    value_type = field.native_type[len(MAP_PREFIX):]
    entry = DescriptorProto(name=f"{field.name}Entry")
    entry.options.map_entry = True
    entry.field.add(
        name="key",
        number=1,
        label=FieldDescriptorProto.LABEL_OPTIONAL,
        type=FieldDescriptorProto.TYPE_STRING,
    )
    value = entry.field.add(
        name="value",
        number=2,
        label=FieldDescriptorProto.LABEL_OPTIONAL,
        type=field_type(value_type, field.enum_values),
    )
    _set_type_name(value, value_type, package, context)
    return entry
