"""Surface model loading from YAML / JSON documents."""

from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

import yaml
from pydantic import ValidationError

from surface_proto.errors import DocumentDecodeError

from .base import SurfaceModel


def load_surface(file_path: Path) -> SurfaceModel:
    """Load a surface model file (YAML or JSON)."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentDecodeError(f"{file_path}: {e}") from e
    return surface_from_document(doc or {})


def surface_from_document(document: dict) -> SurfaceModel:
    """Validate an already-decoded document into a SurfaceModel."""
    if not isinstance(document, dict):
        raise DocumentDecodeError(
            f"Surface document must be a mapping, got {type(document).__name__}"
        )
    try:
        return SurfaceModel.model_validate(document)
    except ValidationError as e:
        raise DocumentDecodeError(f"Invalid surface document: {e}") from e


def package_name_for(location: str) -> str:
    """Derive a package name from a file path or URL.

    'https://example.com/specs/pets.yaml#/components' -> 'pets'
    """
    path = urlsplit(location).path or location
    return PurePosixPath(path).stem
