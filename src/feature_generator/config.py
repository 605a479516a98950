"""Generator configuration: where the spec, manifest and features live."""

import re
from pathlib import Path

from pydantic import BaseModel, Field

from feature_generator.errors import SelectionError

DEFAULT_RESTRICTED_NAMES = (
    "test", "build", "lib", "android", "ios", "web", "windows", "linux", "macos",
)

FEATURE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


class GeneratorConfig(BaseModel):
    """Paths and naming rules for one Flutter project."""

    project_root: Path = Field(default_factory=Path.cwd)
    spec_file: str = "swagger.json"
    manifest_file: str = "pubspec.yaml"
    features_path: str = "lib/features"
    restricted_names: tuple[str, ...] = DEFAULT_RESTRICTED_NAMES

    @classmethod
    def for_root(cls, project_root: Path, **overrides) -> "GeneratorConfig":
        """Build a config, stepping out of a ``tool/`` directory if needed."""
        root = Path(project_root).resolve()
        if root.name == "tool":
            root = root.parent
        return cls(project_root=root, **overrides)

    @property
    def spec_path(self) -> Path:
        return self.project_root / self.spec_file

    @property
    def manifest_path(self) -> Path:
        return self.project_root / self.manifest_file

    @property
    def core_error_path(self) -> Path:
        return self.project_root / "lib" / "core" / "error" / "error.dart"

    def feature_path(self, feature_name: str) -> Path:
        return self.project_root / self.features_path / feature_name

    def feature_location(self, feature_name: str) -> str:
        """Project-relative feature directory, as shown to the user."""
        return f"{self.features_path.rstrip('/')}/{feature_name}/"

    def validate_feature_name(self, name: str) -> None:
        """Raise SelectionError unless ``name`` is an allowed snake_case name."""
        if not name:
            raise SelectionError("Feature name is required")
        if name.lower() in self.restricted_names:
            raise SelectionError(
                f'"{name}" is a restricted name. Please choose a different name.'
            )
        if not FEATURE_NAME_PATTERN.match(name):
            raise SelectionError(
                f"Invalid feature name: {name}. Use snake_case (e.g., user_management)"
            )
