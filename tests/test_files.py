"""
Tests for file enumeration — lazy walk of a package's store path.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from nixlist.adapters.shell.filesystem import walk_tree
from nixlist.core.errors import ArtifactMissing, TraversalError
from nixlist.core.models.package import PackageListing, PackageRecord
from nixlist.core.services.files import find_package_files, package_files
from tests.conftest import HASH


@pytest.fixture
def package_dir(store_dir: Path) -> Path:
    root = store_dir / f"{HASH}-jq-1.7.1"
    (root / "bin").mkdir(parents=True)
    (root / "bin" / "jq").write_text("#!/bin/sh\n")
    (root / "share" / "man" / "man1").mkdir(parents=True)
    (root / "share" / "man" / "man1" / "jq.1.gz").write_bytes(b"\x1f\x8b")
    (root / "lib").symlink_to(root / "share")
    return root


class TestWalkTree:
    def test_yields_every_path(self, package_dir: Path):
        paths = set(walk_tree(package_dir))
        assert paths == {
            package_dir,
            package_dir / "bin",
            package_dir / "bin" / "jq",
            package_dir / "share",
            package_dir / "share" / "man",
            package_dir / "share" / "man" / "man1",
            package_dir / "share" / "man" / "man1" / "jq.1.gz",
            package_dir / "lib",
        }

    def test_symlinked_directory_not_followed(self, package_dir: Path):
        paths = set(walk_tree(package_dir))
        assert package_dir / "lib" / "man" not in paths

    def test_single_file(self, tmp_path: Path):
        f = tmp_path / "file.txt"
        f.write_text("x")
        assert list(walk_tree(f)) == [f]

    def test_missing_raises_on_call(self, tmp_path: Path):
        with pytest.raises(ArtifactMissing):
            walk_tree(tmp_path / "gone")

    def test_is_lazy(self, package_dir: Path):
        it = walk_tree(package_dir)
        assert next(it) == package_dir

    def test_error_midway_keeps_partial_results(self, package_dir: Path):
        def fake_walk(top, onerror=None):
            yield str(top), ["bin"], ["README"]
            onerror(PermissionError(13, "Permission denied", str(Path(top) / "bin")))

        seen = []
        with patch("nixlist.adapters.shell.filesystem.os.walk", fake_walk):
            with pytest.raises(TraversalError) as exc:
                for path in walk_tree(package_dir):
                    seen.append(path)

        assert seen == [package_dir, package_dir / "bin", package_dir / "README"]
        assert "Permission denied" in exc.value.message


class TestPackageFiles:
    def _record(self, path: Path) -> PackageRecord:
        return PackageRecord(store_path=str(path), raw_name=path.name, derived_name="jq", short_name="jq")

    def test_walks_store_path(self, package_dir: Path):
        assert package_dir / "bin" / "jq" in set(package_files(self._record(package_dir)))

    def test_missing_artifact(self, store_dir: Path):
        with pytest.raises(ArtifactMissing):
            package_files(self._record(store_dir / f"{HASH}-gone-1.0"))

    def test_find_package_files(self, package_dir: Path, lister_config):
        listing = PackageListing(
            config_name="maxIT", attribute="attr", packages=[self._record(package_dir)],
        )
        with patch("nixlist.core.services.files.resolve_packages", return_value=listing):
            record, paths = find_package_files(lister_config, "maxIT", "jq")
        assert record.store_path == str(package_dir)
        assert package_dir / "bin" / "jq" in set(paths)
