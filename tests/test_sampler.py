"""Tests for source-file sampling."""

from fakes import blob
from repolens.domain.entities import TreeEntry
from repolens.services.sampler import is_source_file, sample_source_files


class TestIsSourceFile:
    def test_source_extensions(self):
        for path in ["a.js", "b/c.TS", "x.py", "main.go", "App.java", "m.c", "m.cpp", "v.tsx"]:
            assert is_source_file(blob(path)), path

    def test_non_source_and_directories(self):
        assert not is_source_file(blob("README.md"))
        assert not is_source_file(blob("styles.css"))
        assert not is_source_file(TreeEntry(path="src.py", type="tree"))


class TestSampleSourceFiles:
    def test_keeps_tree_order_and_caps(self):
        tree = [blob(f"src/f{i}.js") for i in range(50)]
        sample = sample_source_files(tree, limit=15)
        assert [e.path for e in sample] == [f"src/f{i}.js" for i in range(15)]

    def test_fewer_matches_than_limit_returns_all_of_them(self):
        tree = [blob("README.md"), blob("a.py"), TreeEntry("lib", "tree"), blob("b.go")]
        sample = sample_source_files(tree, limit=40)
        assert [e.path for e in sample] == ["a.py", "b.go"]

    def test_no_matches(self):
        assert sample_source_files([blob("README.md")], limit=15) == []

    def test_non_positive_limit(self):
        assert sample_source_files([blob("a.py")], limit=0) == []
