"""CLI entry point for surface-proto."""

import shlex
from pathlib import Path

import click
from google.protobuf import text_format

from surface_proto.errors import SurfaceProtoError
from surface_proto.generator.descriptor_set import DescriptorSetGenerator, GenerationResult
from surface_proto.generator.references import DEFAULT_TIMEOUT, SubprocessResolver
from surface_proto.surface.loader import load_surface, package_name_for


def _build_resolver(resolver_cmd: str | None, timeout: float) -> SubprocessResolver | None:
    if not resolver_cmd:
        return None
    return SubprocessResolver(shlex.split(resolver_cmd), timeout=timeout)


def _serialize(result: GenerationResult, fmt: str) -> bytes:
    if fmt == "text":
        return text_format.MessageToString(result.descriptor_set).encode("utf-8")
    return result.descriptor_set.SerializeToString()


@click.group()
def main():
    """surface-proto — compile API surface models into protobuf descriptor sets."""
    pass


@main.command()
@click.argument("surface_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the FileDescriptorSet.")
@click.option("--package", default=None, help="Package name (default: surface file name without extension).")
@click.option("--resolver-cmd", envvar="SURFACE_PROTO_RESOLVER", default=None, help="Command that prints the document for a symbolic reference URL.")
@click.option("--timeout", envvar="SURFACE_PROTO_TIMEOUT", default=DEFAULT_TIMEOUT, type=float, show_default=True, help="Resolver timeout in seconds.")
@click.option("--format", "fmt", default="binary", type=click.Choice(["binary", "text"]), help="Output encoding.")
@click.option("--strict", is_flag=True, help="Fail when any warning is reported.")
def generate(surface_path: Path, output: Path, package: str | None, resolver_cmd: str | None, timeout: float, fmt: str, strict: bool):
    """Generate a FileDescriptorSet from a surface model file."""
    package = package or package_name_for(str(surface_path))
    click.echo(f"Loading {surface_path} (package: {package})...")

    try:
        model = load_surface(surface_path)
        click.echo(f"Found {len(model.types)} types, {len(model.methods)} methods.")
        generator = DescriptorSetGenerator(resolver=_build_resolver(resolver_cmd, timeout))
        result = generator.generate(model, package)
    except SurfaceProtoError as e:
        raise click.ClickException(str(e)) from e

    for diagnostic in result.diagnostics:
        click.echo(f"  {diagnostic}", err=True)
    warnings = [d for d in result.diagnostics if d.severity == "warning"]
    if strict and warnings:
        raise click.ClickException(f"{len(warnings)} warning(s) reported in strict mode.")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(_serialize(result, fmt))
    click.echo(f"Wrote {len(result.descriptor_set.file)} files to {output}")
