"""Tests for the chunk planner and uploader."""

from unittest.mock import Mock

import pytest

from cli.exceptions import UploadTransportError
from cli.file_upload import UploadPolicy, count_chunks, plan_chunks, upload_file, upload_file_in_chunks
from cli.upload_client import UploadClient
from common.types import FileDescriptor

MIB = 1024 * 1024


@pytest.fixture
def mock_client():
    """Mocked UploadClient that accepts every request."""
    client = Mock(spec=UploadClient)
    client.upload_single.return_value = {'message': 'File uploaded successfully'}
    client.upload_chunk.return_value = {'message': 'Chunked file uploaded successfully'}
    return client


def descriptor(make_file, name, size):
    return FileDescriptor.from_path(make_file(name, size))


class TestPlanChunks:
    """Tests for splitting byte lengths into ranges."""

    def test_short_final_chunk(self):
        ranges = list(plan_chunks(int(2.5 * MIB), MIB))

        assert [r.chunk_index for r in ranges] == [0, 1, 2]
        assert [r.size for r in ranges] == [MIB, MIB, MIB // 2]
        assert ranges[-1].end == int(2.5 * MIB)

    def test_exact_multiple_has_no_short_chunk(self):
        ranges = list(plan_chunks(3 * MIB, MIB))

        assert len(ranges) == 3
        assert all(r.size == MIB for r in ranges)

    def test_ranges_are_contiguous(self):
        ranges = list(plan_chunks(1000, 300))

        assert ranges[0].start == 0
        for previous, current in zip(ranges, ranges[1:]):
            assert current.start == previous.end

    def test_zero_bytes_has_no_chunks(self):
        assert list(plan_chunks(0, MIB)) == []

    def test_non_positive_chunk_size(self):
        with pytest.raises(ValueError):
            count_chunks(10, 0)


class TestUploadFile:
    """Tests for choosing between single and chunked uploads."""

    def test_small_file_uses_single_request(self, mock_client, make_file):
        file = descriptor(make_file, 'small.txt', 1024)
        on_progress = Mock()

        result = upload_file(file, mock_client, on_progress)

        assert result == {'message': 'File uploaded successfully'}
        mock_client.upload_single.assert_called_once()
        name, _, media_type = mock_client.upload_single.call_args.args
        assert name == 'small.txt'
        assert media_type == 'text/plain'
        mock_client.upload_chunk.assert_not_called()
        on_progress.assert_not_called()

    def test_file_at_threshold_uses_single_request(self, mock_client, make_file):
        policy = UploadPolicy(chunk_size=100, large_file_threshold=500)
        file = descriptor(make_file, 'exact.bin', 500)
        on_progress = Mock()

        upload_file(file, mock_client, on_progress, policy)

        mock_client.upload_single.assert_called_once()
        mock_client.upload_chunk.assert_not_called()
        on_progress.assert_not_called()

    def test_file_over_threshold_is_chunked(self, mock_client, make_file):
        policy = UploadPolicy(chunk_size=100, large_file_threshold=500)
        file = descriptor(make_file, 'over.bin', 501)

        upload_file(file, mock_client, policy=policy)

        mock_client.upload_single.assert_not_called()
        assert mock_client.upload_chunk.call_count == 6

    def test_zero_byte_file_uses_single_request(self, mock_client, make_file):
        file = descriptor(make_file, 'empty.txt', 0)

        upload_file(file, mock_client)

        mock_client.upload_single.assert_called_once()
        mock_client.upload_chunk.assert_not_called()

    def test_default_policy_chunks_above_five_mib(self, mock_client, make_file):
        file = descriptor(make_file, 'large.bin', 5 * MIB + 1)
        on_progress = Mock()

        upload_file(file, mock_client, on_progress)

        assert mock_client.upload_chunk.call_count == 6
        assert on_progress.call_count == 6


class TestUploadFileInChunks:
    """Tests for the sequential chunk loop."""

    def test_two_and_a_half_mib_sends_three_chunks(self, mock_client, make_file):
        path = make_file('movie.bin', int(2.5 * MIB))
        file = FileDescriptor.from_path(path)

        result = upload_file_in_chunks(file, mock_client, chunk_size=MIB)

        assert result == {'message': 'Chunked file uploaded successfully'}
        calls = mock_client.upload_chunk.call_args_list
        assert [c.args[2] for c in calls] == [0, 1, 2]
        assert all(c.args[3] == 3 for c in calls)
        assert [len(c.args[1]) for c in calls] == [MIB, MIB, MIB // 2]
        assert b''.join(c.args[1] for c in calls) == path.read_bytes()

    def test_progress_is_reported_after_each_chunk(self, mock_client, make_file):
        file = descriptor(make_file, 'four.bin', 400)
        progress = []

        upload_file_in_chunks(file, mock_client, progress.append, chunk_size=100)

        assert progress == [25.0, 50.0, 75.0, 100.0]

    def test_failed_chunk_stops_upload(self, mock_client, make_file):
        file = descriptor(make_file, 'broken.bin', 500)
        mock_client.upload_chunk.side_effect = [
            {'message': 'ok'},
            UploadTransportError('Error saving chunk', status_code=500),
            {'message': 'ok'},
        ]
        progress = []

        with pytest.raises(UploadTransportError, match='Error saving chunk'):
            upload_file_in_chunks(file, mock_client, progress.append, chunk_size=100)

        assert mock_client.upload_chunk.call_count == 2
        assert progress == [20.0]
