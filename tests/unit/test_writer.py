"""
Unit tests for artifact writers.
"""

import pytest

from entity_codegen.codegen.core.writer import ArtifactWriteError, FileArtifactWriter


def test_writes_below_root(tmp_path):
    writer = FileArtifactWriter(tmp_path / "out")

    target = writer.write("api/handlers/user_handler.go", "package handlers\n")

    assert target == tmp_path / "out" / "api" / "handlers" / "user_handler.go"
    assert target.read_text(encoding="utf-8") == "package handlers\n"


def test_overwrites_existing_file(tmp_path):
    writer = FileArtifactWriter(tmp_path)
    writer.write("models/user.go", "old\n")
    writer.write("models/user.go", "new\n")

    assert (tmp_path / "models" / "user.go").read_text(encoding="utf-8") == "new\n"


def test_failure_is_artifact_write_error(tmp_path):
    (tmp_path / "models").write_text("a file, not a directory", encoding="utf-8")
    writer = FileArtifactWriter(tmp_path)

    with pytest.raises(ArtifactWriteError) as exc_info:
        writer.write("models/user.go", "package models\n")

    assert exc_info.value.path == "models/user.go"
    assert isinstance(exc_info.value, IOError)
    assert isinstance(exc_info.value.cause, OSError)


@pytest.mark.parametrize("relative_path", ["../escaped.go", "models/../../escaped.go", "/tmp/escaped.go"])
def test_refuses_paths_outside_root(tmp_path, relative_path):
    root = tmp_path / "out"
    writer = FileArtifactWriter(root)

    with pytest.raises(ArtifactWriteError, match="escapes the output root") as exc_info:
        writer.write(relative_path, "package models\n")

    assert exc_info.value.path == relative_path
    assert not (tmp_path / "escaped.go").exists()
    assert not root.exists()
