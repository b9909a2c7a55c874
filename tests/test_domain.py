"""
Tests for repobuilder domain objects.
"""

import unittest
from pathlib import Path

from repobuilder.domain import (
    Artifact,
    ArtifactStatus,
    BuildOutcome,
    PackageResult,
    PackageSource,
    PackageStatus,
    PublishResult,
    RunSummary,
)


class TestPackageSource:
    """Tests for PackageSource."""

    def test_identifier_is_directory_name(self, tmp_path):
        source = PackageSource.from_path(tmp_path / "foo")

        assert source.identifier == "foo"
        assert source.descriptor_path() == tmp_path / "foo" / "PKGBUILD"

    def test_artifacts_match_extension(self, tmp_path):
        (tmp_path / "foo-1.0-1-any.pkg.tar.zst").write_text("pkg")
        (tmp_path / "foo-1.0-1-any.pkg.tar.zst.sig").write_text("sig")
        (tmp_path / "foo-1.0.tar.gz").write_text("src")
        (tmp_path / "nested.pkg.tar.zst").mkdir()

        source = PackageSource.from_path(tmp_path)
        names = [artifact.filename for artifact in source.artifacts(".pkg.tar.zst")]

        assert names == ["foo-1.0-1-any.pkg.tar.zst"]

    def test_artifacts_sorted(self, tmp_path):
        for name in ("b.pkg.tar.zst", "a.pkg.tar.zst"):
            (tmp_path / name).write_text("pkg")

        source = PackageSource.from_path(tmp_path)

        assert [a.filename for a in source.artifacts(".pkg.tar.zst")] == [
            "a.pkg.tar.zst", "b.pkg.tar.zst"
        ]

    def test_artifacts_of_missing_directory(self, tmp_path):
        assert PackageSource.from_path(tmp_path / "gone").artifacts(".pkg.tar.zst") == []


class TestArtifact(unittest.TestCase):
    """Tests for Artifact."""

    def test_names(self):
        artifact = Artifact(path=Path("/build/foo/foo-1.0-1-any.pkg.tar.zst"))

        self.assertEqual(artifact.filename, "foo-1.0-1-any.pkg.tar.zst")
        self.assertEqual(artifact.signature_filename, "foo-1.0-1-any.pkg.tar.zst.sig")


class TestBuildOutcome(unittest.TestCase):
    """Tests for BuildOutcome."""

    def test_fields(self):
        outcome = BuildOutcome(identifier="foo", path=Path("/build/foo"), succeeded=False)

        self.assertEqual(outcome.identifier, "foo")
        self.assertFalse(outcome.succeeded)


class TestPackageResult:
    """Tests for PackageResult."""

    def test_to_dict(self):
        result = PackageResult(
            package="foo",
            path="/build/foo",
            status=PackageStatus.PUBLISHED,
            built=True,
            artifacts=[
                PublishResult("foo-1.0-1-any.pkg.tar.zst", ArtifactStatus.REGISTERED, signed=True)
            ],
        )

        d = result.to_dict()

        assert d['type'] == 'package'
        assert d['status'] == 'published'
        assert d['built'] is True
        assert d['artifacts'] == [{
            'filename': 'foo-1.0-1-any.pkg.tar.zst',
            'status': 'registered',
            'signed': True,
        }]
        assert 'error' not in d

    def test_to_dict_with_error(self):
        result = PackageResult(
            package="foo",
            path="/build/foo",
            status=PackageStatus.FAILED,
            error="build failed",
        )

        d = result.to_dict()

        assert d['status'] == 'failed'
        assert d['error'] == 'build failed'
        assert 'artifacts' not in d


class TestRunSummary:
    """Tests for RunSummary."""

    def test_empty_summary(self):
        summary = RunSummary()

        assert summary.total == 0
        assert summary.success is True

    def test_add_result_counts(self):
        summary = RunSummary(forced=True)
        summary.add_result(PackageResult(
            "a", "/a", PackageStatus.PUBLISHED, built=True,
            artifacts=[
                PublishResult("a1.pkg.tar.zst", ArtifactStatus.REGISTERED, signed=True),
                PublishResult("a2.pkg.tar.zst", ArtifactStatus.ALREADY_PRESENT),
            ],
        ))
        summary.add_result(PackageResult("b", "/b", PackageStatus.FAILED, error="build failed"))
        summary.add_result(PackageResult("c", "/c", PackageStatus.UP_TO_DATE))

        assert summary.total == 3
        assert summary.published == 1
        assert summary.failed == 1
        assert summary.up_to_date == 1
        assert summary.artifacts_registered == 1
        assert summary.errors == ["b: build failed"]
        assert summary.success is False

    def test_to_dict(self):
        summary = RunSummary(single_package=True)
        summary.add_result(PackageResult("a", "/a", PackageStatus.PUBLISHED, built=True))

        d = summary.to_dict()

        assert d['type'] == 'summary'
        assert d['single_package'] is True
        assert d['published'] == 1
        assert d['errors'] == []
