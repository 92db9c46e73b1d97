"""Tests for host metadata lookup."""

import importlib.machinery
import importlib.metadata
import os
import sys
import types
from unittest.mock import patch

import pytest

from dotversion.host import DistributionMetadata, NullHostMetadata, split_build_qualifier


class TestSplitBuildQualifier:
    """Tests for split_build_qualifier."""

    @pytest.mark.parametrize("raw,expected", [
        ("1.2.0", ("1.2.0", "")),
        ("1.2.0+g3a77", ("1.2.0", "g3a77")),
        ("2.0.dev1+local.build.7", ("2.0.dev1", "local.build.7")),
        (" 3.1 ", ("3.1", "")),
        ("not a version", ("not a version", "")),
    ])
    def test_split(self, raw, expected):
        assert split_build_qualifier(raw) == expected


class FakeDistribution:
    """Stand-in for importlib.metadata.Distribution rooted in a directory."""

    def __init__(self, root, files):
        self.root = str(root)
        self.files = files

    def locate_file(self, entry):
        return os.path.join(self.root, entry)


def module_spec(name, init_file=None, package_dir=None):
    spec = importlib.machinery.ModuleSpec(name, None, origin=str(init_file) if init_file else None)
    if package_dir is not None:
        spec.submodule_search_locations = [str(package_dir)]
    return spec


@pytest.fixture
def shared_namespace(tmp_path):
    """site-packages style tree where two distributions share ``google``."""
    for sub in ("auth", "protobuf"):
        (tmp_path / "google" / sub).mkdir(parents=True)
        (tmp_path / "google" / sub / "__init__.py").write_text("", encoding="utf-8")
    dists = {
        "protobuf": FakeDistribution(tmp_path, ["google/protobuf/__init__.py"]),
        "google-auth": FakeDistribution(tmp_path, ["google/auth/__init__.py"]),
    }

    def fake_distribution(name):
        if name not in dists:
            raise importlib.metadata.PackageNotFoundError(name)
        return dists[name]

    versions = {"protobuf": "4.25.1", "google-auth": "2.29.0"}
    with patch("dotversion.host.importlib.metadata.distribution", side_effect=fake_distribution), \
            patch("dotversion.host.importlib.metadata.version", side_effect=versions.__getitem__):
        yield tmp_path


class TestDistributionMetadata:
    """Tests for DistributionMetadata."""

    def test_single_distribution_for_top_level_package(self):
        host = DistributionMetadata({"swissknife": ["swiss-knife"]})
        with patch.object(DistributionMetadata, "_find_spec", return_value=module_spec("swissknife.db")), \
                patch("dotversion.host.importlib.metadata.version", return_value="1.4+b9") as mock_version:
            assert host.lookup("swissknife.db") == ("1.4", "b9")
        mock_version.assert_called_once_with("swiss-knife")

    def test_nonexistent_module_reports_nothing(self):
        """Test that an installed top-level package does not vouch for missing submodules."""
        assert DistributionMetadata().lookup("pytest.no_such_module.deeper") is None
        assert DistributionMetadata({"nosuchpkg": ["nosuchpkg"]}).lookup("nosuchpkg") is None

    def test_shared_top_level_uses_distribution_shipping_module(self, shared_namespace):
        """Test that the distribution owning the module's files is chosen."""
        host = DistributionMetadata({"google": ["protobuf", "google-auth"]})
        spec = module_spec(
            "google.auth",
            shared_namespace / "google" / "auth" / "__init__.py",
            shared_namespace / "google" / "auth",
        )
        with patch.object(DistributionMetadata, "_find_spec", return_value=spec):
            assert host.lookup("google.auth") == ("2.29.0", "")

    def test_shared_namespace_directory_has_no_owner(self, shared_namespace):
        """Test that a namespace package split across distributions reports nothing."""
        host = DistributionMetadata({"google": ["protobuf", "google-auth"]})
        spec = module_spec("google", package_dir=shared_namespace / "google")
        with patch.object(DistributionMetadata, "_find_spec", return_value=spec):
            assert host.lookup("google") is None

    def test_shared_top_level_without_shipping_distribution(self, shared_namespace):
        """Test that no candidate shipping the module gives None."""
        (shared_namespace / "google" / "cloud").mkdir()
        stray = shared_namespace / "google" / "cloud" / "__init__.py"
        stray.write_text("", encoding="utf-8")
        host = DistributionMetadata({"google": ["protobuf", "google-auth"]})
        spec = module_spec("google.cloud", stray, stray.parent)
        with patch.object(DistributionMetadata, "_find_spec", return_value=spec):
            assert host.lookup("google.cloud") is None

    def test_missing_distribution_tries_next(self, tmp_path):
        (tmp_path / "kit").mkdir()
        init = tmp_path / "kit" / "__init__.py"
        init.write_text("", encoding="utf-8")
        host = DistributionMetadata({"kit": ["gone", "kit-dist"]})

        def fake_distribution(name):
            if name == "gone":
                raise importlib.metadata.PackageNotFoundError(name)
            return FakeDistribution(tmp_path, ["kit/__init__.py"])

        with patch.object(DistributionMetadata, "_find_spec", return_value=module_spec("kit", init, init.parent)), \
                patch("dotversion.host.importlib.metadata.distribution", side_effect=fake_distribution), \
                patch("dotversion.host.importlib.metadata.version", return_value="0.3"):
            assert host.lookup("kit") == ("0.3", "")

    def test_module_dunder_version_fallback(self, monkeypatch):
        module = types.ModuleType("plainmod")
        module.__version__ = "5.5+abc"
        monkeypatch.setitem(sys.modules, "plainmod", module)
        host = DistributionMetadata({})
        assert host.lookup("plainmod") == ("5.5", "abc")

    def test_nothing_reported(self):
        assert DistributionMetadata({}).lookup("org.mrsuck") is None

    def test_broken_metadata_is_absent(self):
        host = DistributionMetadata({"kit": ["kit"]})
        with patch.object(DistributionMetadata, "_find_spec", return_value=module_spec("kit")), \
                patch("dotversion.host.importlib.metadata.version", side_effect=RuntimeError("corrupt")):
            assert host.lookup("kit") is None

    def test_real_distribution(self):
        project_version, _ = DistributionMetadata().lookup("pytest")
        assert pytest.__version__.startswith(project_version)


class TestNullHostMetadata:
    def test_always_none(self):
        assert NullHostMetadata().lookup("pytest") is None
