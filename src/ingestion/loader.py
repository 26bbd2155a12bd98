"""
Show file loading.

Show files live flat in one folder and are named "<number> - <slug>.md". The
leading integer is the episode number, the natural key of a show.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

from .change_detector import compute_content_hash
from .errors import LoadError


MD_EXTENSION = ".md"
NUMBER_DELIMITER = " - "


@dataclass(frozen=True)
class ShowFile:
    """A show file read from disk."""

    number: int
    md_file: str
    raw: bytes
    content: str
    hash: str


def list_markdown_files(folder: Union[str, Path]) -> Iterator[str]:
    """
    Yield the names of markdown files directly inside `folder`.

    Subdirectories are not searched. Names come in directory-listing order.

    Raises:
        LoadError: If the folder cannot be listed
    """
    try:
        entries = os.scandir(folder)
    except OSError as e:
        raise LoadError(f"Cannot list show folder {folder}: {e}") from e

    with entries:
        for entry in entries:
            if entry.name.endswith(MD_EXTENSION) and entry.is_file():
                yield entry.name


def episode_number_from_filename(md_file: str) -> int:
    """
    Parse the episode number from a filename like "712 - Some Title.md".

    Raises:
        LoadError: If the text before the first " - " is not a run of 0-9 digits
    """
    token = md_file.split(NUMBER_DELIMITER, 1)[0].strip()
    # ASCII digits only; no sign, underscores or other scripts
    if not (token.isascii() and token.isdigit()):
        raise LoadError(
            f"Cannot parse episode number from filename: {md_file!r}", md_file=md_file
        )
    return int(token)


def load_show_file(folder: Union[str, Path], md_file: str) -> ShowFile:
    """
    Read a show file and fingerprint its raw bytes.

    Raises:
        LoadError: If the filename has no episode number, or the file cannot be
            read or is not valid UTF-8
    """
    number = episode_number_from_filename(md_file)
    file_path = Path(folder) / md_file
    try:
        raw = file_path.read_bytes()
        content = raw.decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Cannot read show file {file_path}: {e}", md_file=md_file) from e

    return ShowFile(
        number=number,
        md_file=md_file,
        raw=raw,
        content=content,
        hash=compute_content_hash(raw),
    )
