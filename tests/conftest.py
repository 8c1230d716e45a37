import pytest

from tests.utils import bencode, scrambled_pieces


@pytest.fixture
def single_file_meta() -> dict:
    return {
        b"announce": b"udp://tracker.leechers-paradise.org:6969",
        b"announce-list": [
            [b"udp://tracker.leechers-paradise.org:6969"],
            [b"udp://tracker.opentrackr.org:1337"],
        ],
        b"comment": b"WebTorrent <https://webtorrent.io>",
        b"creation date": 1490916601,
        b"info": {
            b"length": 276134947,
            b"name": b"Big Buck Bunny.mp4",
            b"piece length": 262144,
            b"pieces": scrambled_pieces(4),
        },
    }


@pytest.fixture
def multi_file_meta() -> dict:
    return {
        b"announce": b"http://tracker.example.org:6969/announce",
        b"info": {
            b"files": [
                {b"length": 1000, b"path": [b"disc1", b"track01.flac"]},
                {b"length": 2500, b"path": [b"disc1", b"track02.flac"]},
                {b"length": 42, b"path": [b"cover.jpg"]},
            ],
            b"name": b"album",
            b"piece length": 16384,
            b"pieces": scrambled_pieces(1),
            b"private": 1,
        },
    }


@pytest.fixture
def single_file_torrent(single_file_meta) -> bytes:
    return bencode(single_file_meta)


@pytest.fixture
def multi_file_torrent(multi_file_meta) -> bytes:
    return bencode(multi_file_meta)


@pytest.fixture
def torrent_path(tmp_path, single_file_torrent):
    path = tmp_path / "big-buck-bunny.torrent"
    path.write_bytes(single_file_torrent)
    return path


@pytest.fixture
def multi_file_path(tmp_path, multi_file_torrent):
    path = tmp_path / "multi-file.torrent"
    path.write_bytes(multi_file_torrent)
    return path
