"""Tests for chunk storage and reassembly."""

import pytest

from cli.file_upload import plan_chunks
from common.types import ChunkEnvelope
from server.chunk_storage import ChunkStorage
from server.exceptions import ChunkMergeError, StorageWriteError
from server.services.chunk_service import ChunkAssembler


@pytest.fixture
def storage(tmp_path):
    """Create chunk storage in a temporary directory."""
    return ChunkStorage(tmp_path / 'chunks')


@pytest.fixture
def assembler(storage, tmp_path):
    """Create a chunk assembler writing into a temporary upload directory."""
    return ChunkAssembler(storage, tmp_path / 'uploads')


def envelopes_for(name, content, chunk_size):
    ranges = list(plan_chunks(len(content), chunk_size))
    return [
        ChunkEnvelope(
            file_name=name,
            chunk_index=r.chunk_index,
            total_chunks=len(ranges),
            data=content[r.start:r.end],
        )
        for r in ranges
    ]


class TestChunkStorage:
    """Tests for chunk part files."""

    def test_part_path_format(self, storage):
        path = storage.get_part_path('report.pdf', 3)
        assert path.name == 'report.pdf.part_3'

    def test_write_read_delete(self, storage):
        storage.write_part('a.txt', 0, b'abc')

        assert storage.part_exists('a.txt', 0)
        assert storage.read_part('a.txt', 0) == b'abc'
        assert storage.delete_part('a.txt', 0) is True
        assert storage.delete_part('a.txt', 0) is False

    def test_write_replaces_duplicate_delivery(self, storage):
        storage.write_part('a.txt', 0, b'old')
        storage.write_part('a.txt', 0, b'new')

        assert storage.read_part('a.txt', 0) == b'new'

    def test_missing_parts(self, storage):
        storage.write_part('a.txt', 1, b'x')
        storage.write_part('a.txt', 3, b'x')

        assert storage.missing_parts('a.txt', 4) == [0, 2]


class TestChunkAssembler:
    """Tests for receiving chunks and merging on the last one."""

    def test_round_trip_is_byte_identical(self, assembler, storage, tmp_path):
        content = bytes(i % 256 for i in range(10_000))

        merged = [assembler.receive_chunk(e) for e in envelopes_for('data.bin', content, 1024)]

        assert merged == [False] * 9 + [True]
        assert (tmp_path / 'uploads' / 'data.bin').read_bytes() == content
        assert list(storage.chunks_dir.iterdir()) == []

    def test_single_chunk_merges_immediately(self, assembler, tmp_path):
        merged = assembler.receive_chunk(ChunkEnvelope('one.txt', 0, 1, b'only'))

        assert merged is True
        assert (tmp_path / 'uploads' / 'one.txt').read_bytes() == b'only'

    def test_zero_byte_single_chunk(self, assembler, tmp_path):
        assembler.receive_chunk(ChunkEnvelope('empty.txt', 0, 1, b''))

        assert (tmp_path / 'uploads' / 'empty.txt').read_bytes() == b''

    def test_merge_overwrites_existing_file(self, assembler, tmp_path):
        upload_dir = tmp_path / 'uploads'
        upload_dir.mkdir()
        (upload_dir / 'same.txt').write_bytes(b'a much longer previous content')

        for envelope in envelopes_for('same.txt', b'new', 2):
            assembler.receive_chunk(envelope)

        assert (upload_dir / 'same.txt').read_bytes() == b'new'

    def test_interleaved_files_do_not_interfere(self, assembler, tmp_path):
        first = envelopes_for('first.bin', b'AAAAAAAA', 3)
        second = envelopes_for('second.bin', b'BBBBBBBBBB', 3)

        for a, b in zip(first, second):
            assembler.receive_chunk(a)
            assembler.receive_chunk(b)
        for remaining in second[len(first):]:
            assembler.receive_chunk(remaining)

        assert (tmp_path / 'uploads' / 'first.bin').read_bytes() == b'AAAAAAAA'
        assert (tmp_path / 'uploads' / 'second.bin').read_bytes() == b'BBBBBBBBBB'

    def test_last_chunk_with_missing_part_fails(self, assembler, storage, tmp_path):
        envelopes = envelopes_for('gap.bin', b'0123456789', 4)
        assembler.receive_chunk(envelopes[0])

        with pytest.raises(ChunkMergeError, match='missing chunk\\(s\\) 1, 2'):
            assembler.receive_chunk(envelopes[-1])

        assert not (tmp_path / 'uploads' / 'gap.bin').exists()
        assert storage.part_exists('gap.bin', 0)
        assert storage.part_exists('gap.bin', 3)

    def test_write_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / 'not-a-dir'
        blocker.write_text('file in the way')
        assembler = ChunkAssembler(ChunkStorage(blocker), tmp_path / 'uploads')

        with pytest.raises(StorageWriteError):
            assembler.receive_chunk(ChunkEnvelope('a.txt', 0, 2, b'x'))
