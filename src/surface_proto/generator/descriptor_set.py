"""Descriptor set generator — compiles a surface model into a FileDescriptorSet.

There are four main steps:
    1. foundation files (descriptor.proto, annotations.proto, empty.proto)
    2. symbolic references, each compiled by a recursive run
    3. messages from the surface types
    4. an RPC service from the surface methods

The file being generated is always the last one in the set; everything it
may depend on comes before it.
"""

from google.protobuf.descriptor_pb2 import FileDescriptorProto, FileDescriptorSet
from pydantic import BaseModel, ConfigDict

from surface_proto.generator.context import RunContext
from surface_proto.generator.diagnostics import Diagnostic
from surface_proto.generator.foundation import EMPTY_FILE, FoundationDescriptors
from surface_proto.generator.messages import build_messages
from surface_proto.generator.references import Resolver, build_symbolic_references
from surface_proto.generator.service import build_service
from surface_proto.surface.base import SurfaceModel

SYNTAX = "proto3"


class GenerationResult(BaseModel):
    """A generated descriptor set plus everything learned while building it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    descriptor_set: FileDescriptorSet
    symbolic_sets: list[FileDescriptorSet] = []
    diagnostics: list[Diagnostic] = []

    @property
    def target(self) -> FileDescriptorProto:
        return self.descriptor_set.file[-1]


class DescriptorSetGenerator:
    """Compiles surface models; one instance is one run.

    All recursive sub-runs go through the same instance, so they share its
    RunContext (resolved references, generated message names).
    """

    def __init__(
        self,
        context: RunContext | None = None,
        resolver: Resolver | None = None,
        foundation: FoundationDescriptors | None = None,
    ):
        self.context = context or RunContext()
        self.resolver = resolver
        self.foundation = foundation or FoundationDescriptors()

    def generate(self, model: SurfaceModel, package: str) -> GenerationResult:
        target = FileDescriptorProto(name=f"{package}.proto", package=package, syntax=SYNTAX)
        diagnostics: list[Diagnostic] = []

        files = self.foundation.files()

        nested = build_symbolic_references(model, self.context, self.resolver, self.generate)
        symbolic_sets = []
        for result in nested:
            symbolic_sets.append(result.descriptor_set)
            diagnostics.extend(result.diagnostics)
        files = [result.target for result in nested] + files

        target.message_type.extend(build_messages(model, package, self.context, diagnostics))
        service, uses_empty = build_service(
            model, package, list(target.message_type), self.context, diagnostics
        )
        target.service.append(service)

        files.append(target)
        add_dependencies(files, uses_empty)
        return GenerationResult(
            descriptor_set=FileDescriptorSet(file=files),
            symbolic_sets=symbolic_sets,
            diagnostics=diagnostics,
        )


def add_dependencies(files: list[FileDescriptorProto], uses_empty: bool) -> None:
    """Make every other file an import of the last file, sorted by name.

    empty.proto is only imported when some method actually uses
    google.protobuf.Empty.
    """
    target = files[-1]
    names = set(target.dependency)
    for fd in files[:-1]:
        if fd.name == EMPTY_FILE and not uses_empty:
            continue
        names.add(fd.name)
    names.discard(target.name)
    del target.dependency[:]
    target.dependency.extend(sorted(names))
