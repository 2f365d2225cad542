"""
Server-Sent Events wire format for update envelopes.

Every envelope becomes one self-delimited frame::

    event: fixi
    data: {"target":"#event-log","swap":"beforeend","text":"<div>hi</div>"}

The three envelope fields travel as a single JSON line, so whatever the
payload contains (blank lines, ``data:`` prefixes, carriage returns) it is
escaped by the JSON encoder and can never terminate the frame early.
"""

import re
from dataclasses import dataclass, field

from .errors import EncodingError
from .models import Envelope, encode_pydantic_model

DEFAULT_EVENT = "fixi"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _check_single_line(name: str, value: str) -> None:
    if "\r" in value or "\n" in value:
        raise EncodingError(f"SSE {name} must not contain line breaks: {value!r}")


def encode_frame(envelope: Envelope, event: str = DEFAULT_EVENT) -> bytes:
    """Serialize an envelope into one UTF-8 encoded SSE frame."""
    _check_single_line("event", event)
    try:
        data = encode_pydantic_model(envelope)
    except ValueError as e:
        raise EncodingError(f"Cannot serialize envelope for {envelope.target!r}: {e}") from e
    return b"event: " + event.encode("utf-8") + b"\ndata: " + data + b"\n\n"


def encode_comment(text: str) -> bytes:
    """A comment-only frame; clients ignore it, proxies see traffic."""
    _check_single_line("comment", text)
    return f": {text}\n\n".encode("utf-8")


@dataclass
class Frame:
    event: str = "message"
    data: str = ""
    id: str | None = None
    comments: list[str] = field(default_factory=list)


def parse_frames(stream: bytes | str) -> list[Frame]:
    """Parse an event stream into frames the way an EventSource does.

    Frames without data are not dispatched, except that comment-only frames
    are kept so callers can observe keep-alives.
    """
    if isinstance(stream, bytes):
        stream = stream.decode("utf-8")

    frames: list[Frame] = []
    current = Frame()
    data_lines: list[str] = []

    lines = _LINE_BREAK.split(stream)
    # A trailing partial line is not a complete field yet
    lines.pop()

    for line in lines:
        if line == "":
            if data_lines or current.comments:
                current.data = "\n".join(data_lines)
                frames.append(current)
            current = Frame()
            data_lines = []
            continue

        if line.startswith(":"):
            current.comments.append(line[1:].removeprefix(" "))
            continue

        name, sep, value = line.partition(":")
        if sep:
            value = value.removeprefix(" ")

        if name == "event":
            current.event = value
        elif name == "data":
            data_lines.append(value)
        elif name == "id":
            current.id = value

    return frames


def decode_envelope(frame: Frame) -> Envelope:
    return Envelope.model_validate_json(frame.data)
