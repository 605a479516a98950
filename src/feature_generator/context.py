"""Load the OpenAPI document and project metadata once per process."""

import json
from dataclasses import dataclass
from pathlib import Path

import yaml

from feature_generator.config import GeneratorConfig
from feature_generator.errors import ConfigError, SpecError
from feature_generator.parser.openapi import EndpointCatalog, parse_openapi


@dataclass(frozen=True)
class SpecContext:
    """The parsed spec and project name, shared read-only by every request."""

    document: dict
    project_name: str
    catalog: EndpointCatalog


def load_document(file_path: Path) -> dict:
    """Decode a spec file: JSON for ``.json``, YAML otherwise."""
    if not file_path.exists():
        raise ConfigError(f"{file_path.name} not found in project root ({file_path.parent})")

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".json":
            doc = json.loads(text)
        else:
            doc = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SpecError(f"Could not decode {file_path.name}: {e}") from e

    if not isinstance(doc, dict):
        raise SpecError(f"{file_path.name} does not contain an OpenAPI document")
    return doc


def read_project_name(manifest_path: Path) -> str:
    """Read the top-level ``name`` key from the project manifest."""
    if not manifest_path.exists():
        raise ConfigError(
            f"{manifest_path.name} not found in project root. "
            "Make sure you're running this from a Flutter project directory."
        )
    try:
        manifest = yaml.safe_load(manifest_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {manifest_path.name}: {e}") from e

    name = manifest.get("name") if isinstance(manifest, dict) else None
    if not name:
        raise ConfigError(f"Could not find project name in {manifest_path.name}")
    return str(name).strip()


def load_context(config: GeneratorConfig) -> SpecContext:
    project_name = read_project_name(config.manifest_path)
    document = load_document(config.spec_path)
    return SpecContext(
        document=document,
        project_name=project_name,
        catalog=parse_openapi(document),
    )
