"""Symbolic reference resolution.

A symbolic reference is a URL to another API description inside the current
one. Each referenced document is fetched through a resolver, turned into a
surface model and compiled by a recursive run of the whole pipeline.
"""

import subprocess
from collections.abc import Callable, Sequence

import yaml

from surface_proto.errors import DocumentDecodeError, ResolutionError
from surface_proto.generator.context import RunContext
from surface_proto.surface.base import SurfaceModel
from surface_proto.surface.loader import package_name_for, surface_from_document

DEFAULT_TIMEOUT = 60.0

Resolver = Callable[[str], bytes]


class SubprocessResolver:
    """Resolves a URL by running an external command and reading its stdout.

    The URL is appended as the last argument, e.g.
    ``SubprocessResolver(["surface-dump"])`` runs ``surface-dump <url>``.
    """

    def __init__(self, command: Sequence[str], timeout: float | None = DEFAULT_TIMEOUT):
        if not command:
            raise ValueError("Resolver command must not be empty")
        self.command = list(command)
        self.timeout = timeout

    def __call__(self, url: str) -> bytes:
        try:
            result = subprocess.run(
                [*self.command, url],
                capture_output=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ResolutionError(f"Resolving {url} timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
            raise ResolutionError(
                f"Resolving {url} failed with exit status {e.returncode}: {stderr[:500]}"
            ) from e
        except OSError as e:
            raise ResolutionError(f"Could not run resolver {self.command[0]!r}: {e}") from e
        return result.stdout


def normalize_references(urls: list[str]) -> list[str]:
    """Strip '#fragment' suffixes and drop duplicates, keeping first-seen order."""
    result = []
    for url in urls:
        base = url.split("#", 1)[0]
        if base not in result:
            result.append(base)
    return result


def decode_document(data: bytes) -> dict:
    """Decode resolver output into a document mapping.

    Resolvers may legitimately produce no output at all, or output that stops
    short. Input that ends before the document is complete is treated as an
    empty document; any other syntax error is fatal.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentDecodeError(f"Resolver output is not UTF-8: {e}") from e
    if not text.strip():
        return {}
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        if _ends_prematurely(e, text):
            return {}
        raise DocumentDecodeError(f"Could not decode resolver output: {e}") from e
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise DocumentDecodeError(
            f"Resolver output must be a mapping, got {type(doc).__name__}"
        )
    return doc


def build_symbolic_references(
    model: SurfaceModel,
    context: RunContext,
    resolver: Resolver | None,
    pipeline: Callable,
) -> list:
    """Compile every not-yet-resolved reference of `model`.

    `pipeline(model, package)` is the full generator run; it shares `context`
    with this call so nested runs see the same registries. Returns the
    nested results in resolution order.
    """
    results = []
    for url in normalize_references(model.symbolic_references):
        if url in context.resolved_references:
            continue
        if resolver is None:
            raise ResolutionError(f"No document resolver configured for reference {url}")
        context.resolved_references.add(url)

        document = decode_document(resolver(url))
        referenced = surface_from_document(document)
        results.append(pipeline(referenced, package_name_for(url)))
    return results


def _ends_prematurely(error: yaml.YAMLError, text: str) -> bool:
    """Whether `error` was raised on reaching the end of `text`."""
    if not isinstance(error, yaml.MarkedYAMLError) or error.problem_mark is None:
        return False
    return error.problem_mark.index >= len(text)
