"""
Line-delimited JSON record store.

Each line holds exactly one record (a RawIssue, FingerprintGroup or
DuplicateSignal). Reads are strict: a line that does not decode into the
expected record aborts the run, since silently skipping it would corrupt the
duplicate counts. Writes are atomic: the destination is only replaced once
the whole sequence has been written to a temporary file next to it.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from common.exceptions import MalformedRecordError
from dto.FingerprintGroup import DuplicateSignal, FingerprintGroup
from dto.Issue import RawIssue

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)
PathLike = Union[str, Path]


def read_records(path: PathLike, model: Type[RecordT]) -> List[RecordT]:
    """
    Read every record from a JSONL file.

    Args:
        path: File to read
        model: Pydantic model each line must validate against

    Returns:
        List of records in file order (blank lines are ignored)

    Raises:
        FileNotFoundError: If the file does not exist
        MalformedRecordError: If any line is not valid UTF-8 or does not
            parse into ``model``
    """
    path = Path(path)
    records: List[RecordT] = []

    with open(path, "rb") as f:
        for line_number, raw_line in enumerate(f, start=1):
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedRecordError(str(path), line_number, f"invalid UTF-8: {e}")

            if not line.strip():
                continue

            try:
                records.append(model.model_validate_json(line))
            except ValidationError as e:
                raise MalformedRecordError(
                    str(path), line_number, f"not a valid {model.__name__}: {e}"
                )

    logger.debug(f"Read {len(records)} {model.__name__} records from {path}")
    return records


def write_records(path: PathLike, records: Iterable[BaseModel]) -> int:
    """
    Atomically replace ``path`` with one JSON line per record.

    The full output is serialised before the destination is touched; on any
    failure the temporary file is removed and the previous contents remain.

    Returns:
        Number of records written
    """
    path = Path(path)
    lines = [record.model_dump_json() + "\n" for record in records]

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_file = tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="\n",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        with tmp_file:
            tmp_file.writelines(lines)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.replace(tmp_file.name, path)
    except BaseException:
        logger.error(f"Failed to write {path}; previous contents left untouched")
        try:
            os.unlink(tmp_file.name)
        except FileNotFoundError:
            pass
        raise

    logger.info(f"Wrote {len(lines)} records to {path}")
    return len(lines)


def read_issues(path: PathLike) -> List[RawIssue]:
    return read_records(path, RawIssue)


def write_issues(path: PathLike, issues: Iterable[RawIssue]) -> int:
    return write_records(path, issues)


def read_fingerprint_groups(path: PathLike) -> List[FingerprintGroup]:
    return read_records(path, FingerprintGroup)


def write_fingerprint_groups(path: PathLike, groups: Iterable[FingerprintGroup]) -> int:
    return write_records(path, groups)


def write_duplicate_signals(path: PathLike, signals: Iterable[DuplicateSignal]) -> int:
    return write_records(path, signals)
