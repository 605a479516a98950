"""Fixed directory layout of a generated feature."""

from dataclasses import dataclass
from pathlib import Path

from feature_generator.naming import model_file_name


@dataclass(frozen=True)
class FeatureLayout:
    """File locations inside ``<features_path>/<name>/``, relative to it."""

    root: Path
    name: str
    model_folder: str = "model"

    @classmethod
    def detect(cls, root: Path, name: str) -> "FeatureLayout":
        """Reuse an existing ``data/models`` folder, otherwise ``data/model``."""
        folder = "models" if (root / "data" / "models").is_dir() else "model"
        return cls(root=root, name=name, model_folder=folder)

    @property
    def model_dir(self) -> str:
        return f"data/{self.model_folder}"

    def model(self, model_name: str) -> str:
        return f"{self.model_dir}/{model_file_name(model_name)}"

    @property
    def service(self) -> str:
        return f"data/remote/service/{self.name}_service.dart"

    @property
    def source(self) -> str:
        return f"data/remote/source/{self.name}_source.dart"

    @property
    def source_impl(self) -> str:
        return f"data/remote/source/{self.name}_source_impl.dart"

    @property
    def repository_impl(self) -> str:
        return f"data/repository/{self.name}_repository_impl.dart"

    @property
    def repository(self) -> str:
        return f"domain/repository/{self.name}_repository.dart"

    @property
    def usecase(self) -> str:
        return f"domain/usecase/{self.name}_usecase.dart"

    @property
    def bloc(self) -> str:
        return f"presentation/bloc/{self.name}_bloc.dart"

    @property
    def event(self) -> str:
        return f"presentation/bloc/{self.name}_event.dart"

    @property
    def state(self) -> str:
        return f"presentation/bloc/{self.name}_state.dart"

    @property
    def screen(self) -> str:
        return f"presentation/screen/{self.name}_screen.dart"

    widget_dir = "presentation/widget"

    def data_dirs(self) -> list[str]:
        return [self.model_dir, "data/remote/service", "data/remote/source", "data/repository"]

    def domain_dirs(self) -> list[str]:
        return ["domain/repository", "domain/usecase"]

    def path(self, relative: str) -> Path:
        return self.root / relative
