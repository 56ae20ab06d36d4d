"""Foundation descriptors every generated file may depend on.

A target file imports google/api/annotations.proto for the `google.api.http`
method option and google/protobuf/empty.proto for methods without a request
or response type. Loaders such as DescriptorPool need the corresponding
FileDescriptorProtos in the set, ahead of the target file.
"""

from google.api import annotations_pb2, http_pb2
from google.protobuf import descriptor_pb2, empty_pb2
from google.protobuf.descriptor_pb2 import FieldDescriptorProto, FileDescriptorProto

DESCRIPTOR_FILE = "google/protobuf/descriptor.proto"
ANNOTATIONS_FILE = "google/api/annotations.proto"
EMPTY_FILE = "google/protobuf/empty.proto"
EMPTY_TYPE = "google.protobuf.Empty"

HTTP_RULE_TYPE = "google.api.HttpRule"
METHOD_OPTIONS_TYPE = ".google.protobuf.MethodOptions"


def _reflect(file_descriptor) -> FileDescriptorProto:
    fd = FileDescriptorProto()
    file_descriptor.CopyToProto(fd)
    return fd


class FoundationDescriptors:
    """Provides ready-made foundation FileDescriptorProtos.

    The annotations file is assembled from the reflected http.proto
    descriptor: it is renamed to the canonical annotations path, gets the
    `http` extension on MethodOptions and a dependency on descriptor.proto.
    Every call returns fresh copies.
    """

    def descriptor_file(self) -> FileDescriptorProto:
        return _reflect(descriptor_pb2.DESCRIPTOR)

    def annotations_file(self) -> FileDescriptorProto:
        fd = _reflect(http_pb2.DESCRIPTOR)
        fd.name = ANNOTATIONS_FILE
        fd.extension.add(
            name="http",
            number=annotations_pb2.http.number,
            label=FieldDescriptorProto.LABEL_OPTIONAL,
            type=FieldDescriptorProto.TYPE_MESSAGE,
            type_name=HTTP_RULE_TYPE,
            extendee=METHOD_OPTIONS_TYPE,
        )
        if DESCRIPTOR_FILE not in fd.dependency:
            fd.dependency.append(DESCRIPTOR_FILE)
        return fd

    def empty_file(self) -> FileDescriptorProto:
        return _reflect(empty_pb2.DESCRIPTOR)

    def files(self) -> list[FileDescriptorProto]:
        """All foundation files, dependencies first."""
        return [self.descriptor_file(), self.annotations_file(), self.empty_file()]
