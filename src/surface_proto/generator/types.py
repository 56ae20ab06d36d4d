"""Mapping of proto3 scalar type names to descriptor field types."""

from google.protobuf.descriptor_pb2 import FieldDescriptorProto

SCALAR_TYPES: dict[str, int] = {
    "double": FieldDescriptorProto.TYPE_DOUBLE,
    "float": FieldDescriptorProto.TYPE_FLOAT,
    "int64": FieldDescriptorProto.TYPE_INT64,
    "uint64": FieldDescriptorProto.TYPE_UINT64,
    "int32": FieldDescriptorProto.TYPE_INT32,
    "fixed64": FieldDescriptorProto.TYPE_FIXED64,
    "fixed32": FieldDescriptorProto.TYPE_FIXED32,
    "bool": FieldDescriptorProto.TYPE_BOOL,
    "string": FieldDescriptorProto.TYPE_STRING,
    "bytes": FieldDescriptorProto.TYPE_BYTES,
    "uint32": FieldDescriptorProto.TYPE_UINT32,
    "sfixed32": FieldDescriptorProto.TYPE_SFIXED32,
    "sfixed64": FieldDescriptorProto.TYPE_SFIXED64,
    "sint32": FieldDescriptorProto.TYPE_SINT32,
    "sint64": FieldDescriptorProto.TYPE_SINT64,
}


def is_scalar(native_type: str) -> bool:
    return native_type in SCALAR_TYPES


def field_type(native_type: str, enum_values: list[str] | None = None) -> int:
    """Descriptor type for a native type name.

    Anything that is not a scalar is an enum when it carries literals,
    otherwise a reference to another message.
    """
    if native_type in SCALAR_TYPES:
        return SCALAR_TYPES[native_type]
    if enum_values:
        return FieldDescriptorProto.TYPE_ENUM
    return FieldDescriptorProto.TYPE_MESSAGE
