import pytest

from fixihub.hub import BroadcastHub
from fixihub.models import Envelope


class RecordingSink:
    """In-memory sink; set ``fail`` to make the next writes raise."""

    def __init__(self, fail=False):
        self.chunks: list[bytes] = []
        self.fail = fail
        self.closed = False

    async def send(self, chunk: bytes) -> None:
        if self.fail:
            raise RuntimeError("connection closed")
        self.chunks.append(chunk)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def hub():
    return BroadcastHub("test")


@pytest.fixture
def make_sink():
    return RecordingSink


@pytest.fixture
def envelope():
    return Envelope(target="#log", swap_strategy="append", payload="<div>hi</div>")
