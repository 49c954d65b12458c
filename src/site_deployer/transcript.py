"""Transcript parser - `aws s3 sync` output to transfer events."""

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from sitesync.errors import MalformedTranscriptLineError

from site_deployer.paths import S3_SCHEME

TARGET_SEPARATOR = " to "


class Operation(enum.Enum):
    UPLOAD = "upload"
    COPY = "copy"
    DELETE = "delete"


@dataclass(frozen=True)
class TransferEvent:
    """One remote object created, overwritten or removed by the sync."""

    operation: Operation
    target_key: str


def _split_tag(line: str) -> Optional[Operation]:
    for operation in Operation:
        if line.startswith(f"{operation.value}:"):
            return operation
    return None


def _is_locator(value: str) -> bool:
    # s3://bucket/key - both parts required
    if not value.startswith(S3_SCHEME):
        return False
    bucket, _, key = value[len(S3_SCHEME):].partition("/")
    return bool(bucket) and bool(key)


def _extract_target(operation: Operation, body: str) -> Optional[str]:
    if operation is Operation.DELETE:
        # single space separates the tag; the rest belongs to the key
        locator = body[1:] if body.startswith(" ") else body
        return locator if _is_locator(locator) else None

    # The source of an upload is a local path and the source of a copy is a
    # locator, so the first " to s3://" always closes the source.
    index = body.find(TARGET_SEPARATOR + S3_SCHEME)
    if index <= 0:
        return None
    locator = body[index + len(TARGET_SEPARATOR):]
    return locator if _is_locator(locator) else None


def parse_line(line: str, line_number: int = 1) -> Optional[TransferEvent]:
    """
    Parse a single transcript line.

    Returns None for informational lines. Raises MalformedTranscriptLineError when
    the line starts with an operation tag but carries no target locator.
    """
    operation = _split_tag(line)
    if operation is None:
        return None

    body = line[len(operation.value) + 1:]
    target = _extract_target(operation, body)
    if target is None:
        raise MalformedTranscriptLineError(line_number, line)

    return TransferEvent(operation=operation, target_key=target)


def parse_transcript(transcript: Union[str, Iterable[str]]) -> Iterator[TransferEvent]:
    """
    Lazily yield transfer events from sync output.

    Args:
        transcript: Full output text, or an iterable of lines

    Yields:
        TransferEvent for every upload/copy/delete line, in input order
    """
    lines = transcript.splitlines() if isinstance(transcript, str) else transcript

    for line_number, raw_line in enumerate(lines, start=1):
        event = parse_line(raw_line.rstrip("\r\n"), line_number)
        if event is not None:
            yield event
