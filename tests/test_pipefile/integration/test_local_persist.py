"""
Integration Tests for persisting Files to the local disk.

Coverage:
- Overwrite policy (force default, exclusive create)
- ``{#}`` unique names
- Parent directory creation
- Cleanup of partial output on failure
"""

import pytest

from pipefile.config import PipeFileConfig
from pipefile.domain.models.file import (
    File,
    FileReadError,
    FileWriteError,
    StreamConsumedError,
    WriteOptions,
)
from pipefile.infrastructure.streams import UniqueFileWriteStream
from pipefile.testing import FailingReadStream

pytestmark = pytest.mark.integration


def _leftovers(directory):
    return sorted(path.name for path in directory.iterdir() if path.name.endswith(".tmp"))


class TestPersist:
    """Tests for File.persist with AsyncLocalFileSystem."""

    @pytest.mark.asyncio
    async def test_buffer_to_new_file(self, tmp_path):
        target = tmp_path / "out.txt"
        calls = []
        file = File(path=target, content="written")

        save = await file.persist(lambda: calls.append("done"))

        assert target.read_bytes() == b"written"
        assert save.finished
        assert save.path == str(target)
        assert calls == ["done"]
        assert _leftovers(tmp_path) == []

    @pytest.mark.asyncio
    async def test_copy_source_to_destination(self, sample_files, tmp_path):
        target = tmp_path / "dist" / "logo.bin"
        file = File(path=sample_files["bin"]).set_destination(target)

        save = await file.persist()

        assert target.read_bytes() == sample_files["bin"].read_bytes()
        assert save.bytes_written == 1024

    @pytest.mark.asyncio
    async def test_overwrites_by_default(self, tmp_path):
        target = tmp_path / "out.txt"
        target.write_bytes(b"old")

        await File(path=target, content="new").persist()

        assert target.read_bytes() == b"new"
        assert _leftovers(tmp_path) == []

    @pytest.mark.asyncio
    async def test_no_force_keeps_existing(self, tmp_path):
        target = tmp_path / "out.txt"
        target.write_bytes(b"old")

        with pytest.raises(FileWriteError) as exc_info:
            await File(path=target, content="new").persist({"force": False})

        assert isinstance(exc_info.value.cause, FileExistsError)
        assert target.read_bytes() == b"old"

    @pytest.mark.asyncio
    async def test_safe_writes_config(self, tmp_path):
        target = tmp_path / "out.txt"
        target.write_bytes(b"old")
        file = File(path=target, content="new", config=PipeFileConfig.for_safe_writes())

        with pytest.raises(FileWriteError):
            await file.persist()
        assert target.read_bytes() == b"old"

    @pytest.mark.asyncio
    async def test_unique_pattern(self, tmp_path):
        (tmp_path / "r-0.txt").write_bytes(b"first")
        file = File(path=str(tmp_path / "r-{#}.txt"), content="second")

        save = await file.persist()

        assert save.path == str(tmp_path / "r-1.txt")
        assert (tmp_path / "r-1.txt").read_bytes() == b"second"
        assert (tmp_path / "r-0.txt").read_bytes() == b"first"

    @pytest.mark.asyncio
    async def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "c.txt"
        await File(path=target, content="x").persist()
        assert target.read_bytes() == b"x"

    @pytest.mark.asyncio
    async def test_missing_parent_without_create_dirs(self, tmp_path, errors):
        target = tmp_path / "missing" / "c.txt"
        file = File(path=target, content="x", error_handler=errors.append)

        save = await file.persist({"create_dirs": False})

        assert not save.finished
        assert isinstance(errors[0].cause, FileNotFoundError)
        assert not target.parent.exists()

    @pytest.mark.asyncio
    async def test_empty_buffer_creates_empty_file(self, sample_files, tmp_path):
        file = File(path=sample_files["empty"])
        await file.materialize()
        target = tmp_path / "copy.txt"

        await file.set_destination(target).persist()

        assert target.exists()
        assert target.read_bytes() == b""

    @pytest.mark.asyncio
    async def test_persist_onto_own_source(self, sample_files):
        """Test overwriting the file being read leaves complete content."""
        source = sample_files["bin"]
        expected = source.read_bytes()

        await File(path=source).persist()

        assert source.read_bytes() == expected
        assert _leftovers(source.parent) == []


class TestPersistFailures:
    """Partial output is removed when the content fails midway."""

    @pytest.mark.asyncio
    async def test_handled_read_error_leaves_nothing(self, tmp_path, errors):
        target = tmp_path / "out.bin"
        stream = FailingReadStream([b"partial"], error_handler=errors.append)

        save = await File(path=target, content=stream).persist()

        assert not save.finished
        assert len(errors) == 1
        assert not target.exists()
        assert _leftovers(tmp_path) == []

    @pytest.mark.asyncio
    async def test_unhandled_read_error_keeps_existing_file(self, tmp_path):
        target = tmp_path / "out.bin"
        target.write_bytes(b"previous")

        with pytest.raises(FileReadError):
            await File(path=target, content=FailingReadStream([b"partial"])).persist()

        assert target.read_bytes() == b"previous"
        assert _leftovers(tmp_path) == []

    @pytest.mark.asyncio
    async def test_exclusive_create_removed_on_failure(self, tmp_path):
        target = tmp_path / "out.bin"
        file = File(path=target, content=FailingReadStream([b"partial"]))

        with pytest.raises(FileReadError):
            await file.persist(WriteOptions(force=False))

        assert not target.exists()

    @pytest.mark.asyncio
    async def test_unhandled_write_error_closes_source(self, sample_files, tmp_path):
        target = tmp_path / "missing" / "logo.bin"
        file = File(path=sample_files["bin"]).set_destination(target)

        with pytest.raises(FileWriteError):
            await file.persist({"create_dirs": False})

        assert file.content.stream.consumed
        with pytest.raises(StreamConsumedError):
            await file.set_destination(tmp_path / "logo.bin").persist()
        assert not (tmp_path / "logo.bin").exists()


class TestConcatenation:
    """Several Files drained into one write stream."""

    @pytest.mark.asyncio
    async def test_bundle(self, sample_files, tmp_path):
        target = tmp_path / "bundle.txt"
        save = UniqueFileWriteStream(str(target))
        header = File(path=tmp_path / "header", content="# header\n")
        body = File(path=sample_files["txt"])

        await header.read_into(save, end=False)
        await body.read_into(save)

        assert save.finished
        assert target.read_bytes() == b"# header\npipeline stage input\n"
