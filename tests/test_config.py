from pathlib import Path

import pytest

from feature_generator.config import GeneratorConfig
from feature_generator.errors import SelectionError


class TestGeneratorConfig:
    def test_defaults(self, tmp_path):
        config = GeneratorConfig.for_root(tmp_path)
        assert config.spec_path == tmp_path.resolve() / "swagger.json"
        assert config.manifest_path == tmp_path.resolve() / "pubspec.yaml"
        assert config.feature_path("store") == tmp_path.resolve() / "lib" / "features" / "store"
        assert config.core_error_path == tmp_path.resolve() / "lib" / "core" / "error" / "error.dart"

    def test_tool_directory_steps_up(self, tmp_path):
        tool = tmp_path / "tool"
        tool.mkdir()
        config = GeneratorConfig.for_root(tool)
        assert config.project_root == tmp_path.resolve()

    def test_overrides(self, tmp_path):
        config = GeneratorConfig.for_root(tmp_path, spec_file="api/openapi.yaml", features_path="lib/modules")
        assert config.spec_path == tmp_path.resolve() / "api" / "openapi.yaml"
        assert config.feature_location("store") == "lib/modules/store/"

    def test_default_root_is_cwd(self):
        assert GeneratorConfig().project_root == Path.cwd()


class TestValidateFeatureName:
    @pytest.mark.parametrize("name", ["store", "user_management", "v2_orders"])
    def test_valid(self, name):
        GeneratorConfig().validate_feature_name(name)

    def test_required(self):
        with pytest.raises(SelectionError, match="required"):
            GeneratorConfig().validate_feature_name("")

    @pytest.mark.parametrize("name", ["test", "build", "IOS", "web"])
    def test_restricted(self, name):
        with pytest.raises(SelectionError, match="restricted"):
            GeneratorConfig().validate_feature_name(name)

    @pytest.mark.parametrize("name", ["UserManagement", "user-management", "_store", "9lives", "store!"])
    def test_not_snake_case(self, name):
        with pytest.raises(SelectionError, match="snake_case"):
            GeneratorConfig().validate_feature_name(name)
