"""Exceptions raised by the surface-to-protobuf compiler.

Every exception here is fatal for the run that raised it. Non-fatal policy
problems are reported as diagnostics instead.
"""


class SurfaceProtoError(Exception):
    """Base class for all compiler failures."""


class ResolutionError(SurfaceProtoError):
    """A symbolic reference could not be resolved into a document."""


class DocumentDecodeError(SurfaceProtoError):
    """Resolver output or a surface file could not be decoded."""


class ExtensionError(SurfaceProtoError):
    """The HTTP rule could not be attached to a method's options."""
