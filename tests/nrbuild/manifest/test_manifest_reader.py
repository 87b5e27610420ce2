"""Tests for reading the reference package descriptor."""

import pytest

from nrbuild.errors import ConfigurationError
from nrbuild.manifest.reader import ReferenceManifest, read_reference_manifest


class TestReferenceManifest:

    def test_defaults(self):
        manifest = ReferenceManifest()
        assert manifest.name == ""
        assert manifest.dependencies is None
        assert manifest.dev_dependencies is None

    def test_camel_case_dev_dependencies(self):
        manifest = ReferenceManifest.model_validate({"name": "a", "devDependencies": {"b": "1"}})
        assert manifest.dev_dependencies == {"b": "1"}

    def test_ignores_unrelated_keys(self):
        manifest = ReferenceManifest.model_validate({"name": "a", "scripts": {"x": "y"}, "license": "MIT"})
        assert manifest.name == "a"

    def test_dependency_names(self):
        manifest = ReferenceManifest(
            name="a",
            dependencies={"x": "1", "y": "2"},
            devDependencies={"y": "2", "z": "3"},
        )
        assert manifest.dependency_names == ["x", "y", "z"]


class TestReadReferenceManifest:

    def test_reads_relative_to_cwd(self, temp_dir, reference_package):
        reference_package()

        manifest = read_reference_manifest("package.json", cwd=temp_dir)

        assert manifest.name == "pkg-a"
        assert manifest.dependencies == {"x": "1.0.0"}
        assert manifest.dev_dependencies == {"node-red": "^4.0.0"}

    def test_reads_absolute_path(self, temp_dir, reference_package):
        path = reference_package({"name": "abs"}, name="ref.json")

        assert read_reference_manifest(path, cwd="/nowhere").name == "abs"

    def test_missing_file_raises(self, temp_dir):
        with pytest.raises(ConfigurationError, match="Unable to read package descriptor"):
            read_reference_manifest("package.json", cwd=temp_dir)

    def test_invalid_json_raises(self, temp_dir):
        (temp_dir / "package.json").write_text("{ not json")

        with pytest.raises(ConfigurationError):
            read_reference_manifest("package.json", cwd=temp_dir)

    def test_non_mapping_raises(self, temp_dir):
        (temp_dir / "package.json").write_text("[1, 2]")

        with pytest.raises(ConfigurationError):
            read_reference_manifest("package.json", cwd=temp_dir)

    def test_wrong_field_types_raise(self, temp_dir, reference_package):
        reference_package({"name": "a", "dependencies": ["x"]})

        with pytest.raises(ConfigurationError, match="Malformed package descriptor"):
            read_reference_manifest("package.json", cwd=temp_dir)

    def test_directory_raises(self, temp_dir):
        (temp_dir / "package.json").mkdir()

        with pytest.raises(ConfigurationError):
            read_reference_manifest("package.json", cwd=temp_dir)
