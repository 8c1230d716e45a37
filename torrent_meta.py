# torrent_meta.py
#
# Load .torrent files with bdecode and summarize their metadata.
#
# Usage:
#     python torrent_meta.py ubuntu.torrent

import argparse
import logging
import sys
from pathlib import Path

from bdecode import Bytes, Dictionary, Integer, List, decode
from bdecode_errors import BencodeError

PIECE_HASH_SIZE = 20  # SHA-1 digest per piece

_logger = logging.getLogger("torrent_meta")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )


def load_torrent(path: str | Path) -> Dictionary:
    """
    Load and decode a .torrent file.

    Byte strings in the returned tree are views into the file contents read
    here, so they stay valid for as long as the tree is alive.
    """
    path = Path(path)
    data = path.read_bytes()
    meta = decode(data)

    if not isinstance(meta, Dictionary):
        raise ValueError("Torrent file did not decode to a dictionary")

    _logger.debug(f"Loaded {path} ({len(data)} bytes)")
    return meta


def _text(value) -> str | None:
    if isinstance(value, Bytes):
        return value.tobytes().decode("utf-8", errors="replace")
    return None


def _int(value) -> int | None:
    if isinstance(value, Integer):
        return value.value
    return None


def _files(info: Dictionary) -> list[dict]:
    files = []
    for entry in info[b"files"]:
        if not isinstance(entry, Dictionary):
            raise ValueError("Torrent 'files' entry is not a dictionary")
        parts = entry.get(b"path")
        path = "/".join(_text(p) or "" for p in parts) if isinstance(parts, List) else ""
        files.append({"path": path, "length": _int(entry.get(b"length"))})
    return files


def summarize(meta: Dictionary) -> dict:
    """Pull the commonly used fields out of a decoded torrent."""
    info = meta.get(b"info")
    if not isinstance(info, Dictionary):
        raise ValueError("Torrent has no 'info' dictionary")

    multi_file = isinstance(info.get(b"files"), List)
    files = _files(info) if multi_file else []
    if multi_file:
        total_length = sum(f["length"] or 0 for f in files)
    else:
        total_length = _int(info.get(b"length")) or 0

    pieces = info.get(b"pieces")

    return {
        "announce": _text(meta.get(b"announce")),
        "has_announce_list": b"announce-list" in meta,
        "name": _text(info.get(b"name")),
        "piece_length": _int(info.get(b"piece length")),
        "length": _int(info.get(b"length")),
        "multi_file": multi_file,
        "files": files,
        "total_length": total_length,
        "piece_count": len(pieces) // PIECE_HASH_SIZE if isinstance(pieces, Bytes) else 0,
        "private": _int(info.get(b"private")) == 1,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="torrent_meta", description="Show .torrent metadata")
    parser.add_argument("torrent")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        summary = summarize(load_torrent(args.torrent))
    except (OSError, ValueError, BencodeError) as e:
        print(f"Error: {e}")
        return 1

    print("announce:", summary["announce"])
    print("has announce-list:", summary["has_announce_list"])
    print("name:", summary["name"])
    print("piece length:", summary["piece_length"])
    print("single-file length:", summary["length"])
    print("multi-file:", summary["multi_file"])
    for f in summary["files"]:
        print(f"  {f['path']} ({f['length']} bytes)")
    print("total length:", summary["total_length"])
    print("pieces:", summary["piece_count"])
    print("private:", summary["private"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
