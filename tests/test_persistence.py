"""
Tests for persistence — the no-overwrite, atomic source file writer.
"""

import os
import stat
from pathlib import Path

import pytest

from layerkit.core.persistence.source_file import write_source_file


class TestWriteSourceFile:
    def test_writes_new_file(self, tmp_path: Path):
        path = tmp_path / "post.py"
        result = write_source_file(path, "class Post:\n    pass\n")
        assert result.written
        assert result.path == path
        assert path.read_text() == "class Post:\n    pass\n"

    def test_creates_directories(self, tmp_path: Path):
        path = tmp_path / "app" / "repositories" / "Blog" / "PostRepository.py"
        write_source_file(path, "x = 1\n")
        assert path.is_file()

    def test_existing_file_is_conflict(self, tmp_path: Path):
        path = tmp_path / "post.py"
        first = write_source_file(path, "original\n")
        second = write_source_file(path, "replacement\n")
        assert first.written
        assert second.conflict
        assert not second.written
        assert path.read_text() == "original\n"

    def test_no_temp_files_left(self, tmp_path: Path):
        write_source_file(tmp_path / "post.py", "x = 1\n")
        assert list(tmp_path.glob(".*.tmp")) == []

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
    def test_file_is_world_readable(self, tmp_path: Path):
        path = tmp_path / "post.py"
        write_source_file(path, "x = 1\n")
        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_failed_rename_cleans_up(self, tmp_path: Path, monkeypatch):
        def _boom(self, target):
            raise OSError("disk on fire")

        monkeypatch.setattr(Path, "rename", _boom)
        path = tmp_path / "post.py"
        with pytest.raises(OSError, match="disk on fire"):
            write_source_file(path, "x = 1\n")
        assert not path.exists()
        assert list(tmp_path.glob(".*.tmp")) == []

    def test_parent_is_a_file(self, tmp_path: Path):
        (tmp_path / "app").write_text("not a directory")
        with pytest.raises(OSError):
            write_source_file(tmp_path / "app" / "repositories" / "Post.py", "x = 1\n")
