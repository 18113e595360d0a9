import errno
import logging
import os
import sys

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)

import fshelpers.utils.filesystem as filesystem
from fshelpers.core.error import ErrorKind
from fshelpers.core.error import classify
from fshelpers.utils.filesystem import is_dir
from fshelpers.utils.filesystem import mkdir
from fshelpers.utils.filesystem import mkdir_p
from fshelpers.utils.filesystem import mkf
from fshelpers.utils.filesystem import mkf_p
from fshelpers.utils.filesystem import rm
from fshelpers.utils.filesystem import rmdir
from fshelpers.utils.filesystem import rmdir_r
from fshelpers.utils.filesystem import rmf

symlinks = pytest.mark.skipif(
    sys.platform == "win32",
    reason="creating symbolic links needs privileges on windows",
)


@pytest.fixture
def spans(monkeypatch):
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr(filesystem, "_tracer", provider.get_tracer("test"))
    return exporter


@pytest.mark.unit
class TestCreate:
    def test_mkdir_twice(self, workspace):
        mkdir("goku")
        mkdir("goku")
        assert (workspace / "goku").is_dir()

    def test_mkdir_does_not_create_parents(self, workspace):
        with pytest.raises(FileNotFoundError):
            mkdir("capsule/corp")
        assert not (workspace / "capsule").exists()

    def test_mkdir_p_twice(self, workspace):
        mkdir_p("kame/house/roof")
        mkdir_p("kame/house/roof")
        assert (workspace / "kame" / "house" / "roof").is_dir()

    def test_mkdir_p_accepts_path_objects(self, workspace):
        mkdir_p(workspace / "namek" / "guru")
        assert (workspace / "namek" / "guru").is_dir()

    def test_mkf_twice_keeps_contents(self, workspace):
        mkf("scouter")
        (workspace / "scouter").write_text("over 9000")
        mkf("scouter")
        assert (workspace / "scouter").read_text() == "over 9000"

    def test_mkf_creates_empty_file(self, workspace):
        mkf("dragonball")
        assert (workspace / "dragonball").is_file()
        assert (workspace / "dragonball").stat().st_size == 0

    def test_mkf_without_parent(self, workspace):
        with pytest.raises(FileNotFoundError):
            mkf("missing/dragonball")

    def test_mkf_p_creates_parents(self, workspace):
        mkf_p("a/b/c/file")
        assert (workspace / "a").is_dir()
        assert (workspace / "a" / "b").is_dir()
        assert (workspace / "a" / "b" / "c").is_dir()
        assert (workspace / "a" / "b" / "c" / "file").is_file()

    def test_mkf_p_twice_does_not_truncate(self, workspace):
        mkf_p("a/b/c/file")
        (workspace / "a" / "b" / "c" / "file").write_text("senzu")
        mkf_p("a/b/c/file")
        assert (workspace / "a" / "b" / "c" / "file").read_text() == "senzu"

    def test_mkf_p_bare_file_name(self, workspace):
        mkf_p("bulma")
        mkf_p("bulma")
        assert (workspace / "bulma").is_file()

    def test_mkf_p_skips_existing_parent(self, workspace, monkeypatch):
        mkdir("vegeta")
        calls = []
        monkeypatch.setattr(filesystem, "mkdir_p", calls.append)
        mkf_p("vegeta/pride")
        assert calls == []
        assert (workspace / "vegeta" / "pride").is_file()


@pytest.mark.unit
class TestRemove:
    def test_create_and_remove_dir(self, workspace):
        mkdir("X")
        mkdir("X")
        rmdir("X")
        assert not (workspace / "X").exists()

    def test_rmdir_ignores_missing(self, workspace):
        rmdir("frieza")
        assert list(workspace.iterdir()) == []

    def test_rmdir_ignores_populated(self, workspace):
        mkf_p("cell/games")
        rmdir("cell")
        assert (workspace / "cell").is_dir()
        assert (workspace / "cell" / "games").is_file()

    def test_rmdir_ignores_nested_populated(self, workspace):
        mkdir_p("hi/hello")
        rmdir("hi")
        assert (workspace / "hi" / "hello").is_dir()

    def test_rmdir_r_removes_tree(self, workspace):
        mkf_p("p/q/r")
        assert (workspace / "p").is_dir()
        assert (workspace / "p" / "q").is_dir()
        assert (workspace / "p" / "q" / "r").is_file()
        rmdir_r("p")
        assert not (workspace / "p").exists()

    def test_rmdir_r_ignores_missing(self, workspace):
        rmdir_r("buu")
        assert list(workspace.iterdir()) == []

    def test_rmdir_r_on_file_propagates(self, workspace):
        mkf("gohan")
        with pytest.raises(OSError) as exc:
            rmdir_r("gohan")
        assert classify(exc.value) is ErrorKind.OTHER
        assert (workspace / "gohan").is_file()

    def test_rmf_removes_file(self, workspace):
        mkf("piccolo")
        rmf("piccolo")
        assert not (workspace / "piccolo").exists()

    def test_rmf_ignores_missing(self, workspace):
        rmf("krillin")
        assert list(workspace.iterdir()) == []

    def test_rmf_on_directory_propagates(self, workspace):
        mkdir("trunks")
        with pytest.raises(OSError) as exc:
            rmf("trunks")
        assert classify(exc.value) is ErrorKind.OTHER
        assert (workspace / "trunks").is_dir()

    def test_rm_file(self, workspace):
        mkf_p("saiyans/goten")
        mkf("saiyans/trunks")
        rm("saiyans/goten")
        assert not (workspace / "saiyans" / "goten").exists()
        assert (workspace / "saiyans" / "trunks").is_file()

    def test_rm_populated_directory(self, workspace):
        mkf_p("saiyans/goten")
        mkf_p("saiyans/gotenks/fusion")
        rm("saiyans")
        assert not (workspace / "saiyans").exists()

    def test_rm_ignores_missing(self, workspace):
        rm("path/to/test/nonexistent")
        assert not (workspace / "path").exists()

    @symlinks
    def test_rm_does_not_follow_links(self, workspace):
        mkf_p("real/contents")
        os.symlink("real", "link")
        rm("link")
        assert not os.path.lexists(workspace / "link")
        assert (workspace / "real" / "contents").is_file()

    @symlinks
    def test_rm_link_with_trailing_separator(self, workspace):
        mkf_p("real/precious")
        os.symlink("real", "link")
        rm("link/")
        assert not os.path.lexists(workspace / "link")
        assert (workspace / "real" / "precious").is_file()

    @symlinks
    def test_rmdir_r_removes_link_only(self, workspace):
        mkf_p("real/precious")
        os.symlink("real", "link")
        rmdir_r("link")
        assert not os.path.lexists(workspace / "link")
        assert (workspace / "real" / "precious").is_file()

    @symlinks
    def test_rmdir_r_link_with_trailing_separator(self, workspace):
        mkf_p("real/precious")
        os.symlink("real", "link")
        rmdir_r("link//")
        assert not os.path.lexists(workspace / "link")
        assert (workspace / "real" / "precious").is_file()

    def test_rm_directory_with_trailing_separator(self, workspace):
        mkf_p("saiyans/goten")
        rm("saiyans/")
        assert not (workspace / "saiyans").exists()

    def test_rm_empty_path_keeps_workspace(self, workspace):
        mkf("dende")
        rm("")
        assert (workspace / "dende").is_file()

    @symlinks
    def test_rm_broken_link(self, workspace):
        os.symlink("nowhere", "dangling")
        rm("dangling")
        assert not os.path.lexists(workspace / "dangling")


@pytest.mark.unit
class TestIsDir:
    def test_directory(self, workspace):
        mkdir("zeno")
        assert is_dir("zeno") is True

    def test_file(self, workspace):
        mkf("zeno")
        assert is_dir("zeno") is False

    def test_missing(self, workspace):
        assert is_dir("beerus") is False

    def test_root(self):
        assert is_dir(os.path.abspath(os.sep)) is True

    @symlinks
    def test_link_to_directory(self, workspace):
        mkdir("whis")
        os.symlink("whis", "angel")
        assert is_dir("angel") is True

    @symlinks
    def test_link_to_file(self, workspace):
        mkf("whis")
        os.symlink("whis", "angel")
        assert is_dir("angel") is False

    @symlinks
    def test_relative_link_in_subdirectory(self, workspace):
        mkdir_p("universe/seven")
        os.symlink("seven", "universe/home")
        assert is_dir(workspace / "universe" / "home") is True

    @symlinks
    def test_broken_link_fails(self, workspace):
        os.symlink("nowhere", "dangling")
        with pytest.raises(FileNotFoundError):
            is_dir("dangling")


@pytest.mark.unit
class TestPropagation:
    def test_original_error_is_reraised(self, workspace, monkeypatch):
        error = PermissionError(errno.EACCES, "Permission denied", "tien")

        def deny(path):
            raise error

        monkeypatch.setattr(filesystem.os, "mkdir", deny)
        with pytest.raises(PermissionError) as exc:
            mkdir("tien")
        assert exc.value is error

    def test_directory_not_empty_by_errno(self, workspace, monkeypatch):
        def populated(path):
            raise OSError(errno.ENOTEMPTY, "Directory not empty", path)

        monkeypatch.setattr(filesystem.os, "rmdir", populated)
        rmdir("yamcha")

    def test_directory_not_empty_not_permitted_recursively(
        self, workspace, monkeypatch
    ):
        def populated(path):
            raise OSError(errno.ENOTEMPTY, "Directory not empty", path)

        monkeypatch.setattr(filesystem.shutil, "rmtree", populated)
        with pytest.raises(OSError) as exc:
            rmdir_r("yamcha")
        assert exc.value.errno == errno.ENOTEMPTY


@pytest.mark.integration
class TestObservability:
    def test_permitted_error_is_logged(self, workspace, caplog):
        caplog.set_level(logging.DEBUG, logger=filesystem.__name__)
        mkdir("chichi")
        assert caplog.records == []
        mkdir("chichi")
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.DEBUG
        assert "ALREADY_EXISTS" in record.getMessage()
        assert record.operation == "mkdir"
        assert record.path == "chichi"
        assert record.permitted == "already-exists"

    def test_propagated_error_is_not_logged(self, workspace, caplog):
        caplog.set_level(logging.DEBUG, logger=filesystem.__name__)
        mkdir("videl")
        with pytest.raises(OSError):
            rmf("videl")
        assert caplog.records == []

    def test_span_per_operation(self, workspace, spans):
        mkdir("launch")
        mkdir("launch")
        finished = spans.get_finished_spans()
        assert [span.name for span in finished] == [
            "fshelpers.mkdir",
            "fshelpers.mkdir",
        ]
        assert finished[0].attributes["fs.path"] == "launch"
        assert "fs.permitted" not in finished[0].attributes
        assert finished[1].attributes["fs.permitted"] == "already-exists"

    def test_mkf_p_spans(self, workspace, spans):
        mkf_p("a/b")
        mkf_p("a/b")
        names = [span.name for span in spans.get_finished_spans()]
        assert names == [
            "fshelpers.mkdir_p",
            "fshelpers.mkf_p",
            "fshelpers.mkf_p",
        ]

    def test_span_records_propagated_error(self, workspace, spans):
        with pytest.raises(FileNotFoundError):
            mkdir("oolong/puar")
        (span,) = spans.get_finished_spans()
        assert not span.status.is_ok
        assert span.events[0].name == "exception"
