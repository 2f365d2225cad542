"""
End-to-end test for the /events stream.

Starts the real uvicorn server, opens an event stream with httpx, triggers
counter increments over plain HTTP and checks the frames pushed to the
stream. Also checks that stopping the server ends open streams.
"""

import json
import os
import signal
import socket
import subprocess
import sys
import time

import httpx
import pytest


def _free_port():
    """Find a free TCP port."""
    with socket.socket() as s:
        s.bind(("", 0))
        return s.getsockname()[1]


def _next_frame(lines):
    """Collect lines up to the next blank line."""
    frame = []
    for line in lines:
        if line == "":
            return frame
        frame.append(line)
    raise AssertionError("stream ended before a full frame arrived")


def _start_server(log_dir):
    """Run the fixi-hub entry point on a free port; wait until it answers."""
    port = _free_port()
    log_path = log_dir / "server.log"
    log_file = open(log_path, "w")
    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    env = {
        **os.environ,
        "PYTHONPATH": root,
        "HOST": "127.0.0.1",
        "PORT": str(port),
        "FIXI_HEARTBEAT_INTERVAL": "0",
    }
    env.pop("MQTT_BROKER", None)

    proc = subprocess.Popen(
        [sys.executable, "-m", "fixihub.uvicorn"],
        cwd=root,
        env=env,
        stdout=log_file,
        stderr=subprocess.STDOUT,
    )
    log_file.close()
    base_url = f"http://127.0.0.1:{port}"

    deadline = time.time() + 20
    while time.time() < deadline:
        try:
            httpx.get(base_url + "/", timeout=1)
            return proc, base_url, log_path
        except httpx.TransportError:
            if proc.poll() is not None:
                pytest.fail(f"server exited: {log_path.read_text()}")
            time.sleep(0.2)
    proc.kill()
    pytest.fail("server did not start in time")


def _stop_server(proc):
    proc.send_signal(signal.SIGINT)
    try:
        proc.wait(timeout=10)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()


@pytest.fixture(scope="module")
def server(tmp_path_factory):
    proc, base_url, _ = _start_server(tmp_path_factory.mktemp("fixihub_e2e"))
    yield base_url
    _stop_server(proc)


def test_shutdown_ends_open_streams(tmp_path):
    proc, base_url, log_path = _start_server(tmp_path)
    try:
        with httpx.Client(base_url=base_url, timeout=httpx.Timeout(10.0)) as client:
            with client.stream("GET", "/events") as stream:
                lines = stream.iter_lines()
                assert _next_frame(lines) == [": connected"]

                proc.send_signal(signal.SIGINT)

                # the server ends the response instead of waiting for us
                assert list(lines) == []
                assert proc.wait(timeout=10) is not None
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()

    log = log_path.read_text()
    assert "SSE client unsubscribed from counter (total: 0)" in log
    assert "Broadcast hubs closed" in log


def test_stream_receives_counter_updates(server):
    timeout = httpx.Timeout(10.0)
    with httpx.Client(base_url=server, timeout=timeout) as client:
        with client.stream("GET", "/events") as stream:
            assert stream.status_code == 200
            assert stream.headers["content-type"].startswith("text/event-stream")
            assert stream.headers["cache-control"] == "no-cache"

            lines = stream.iter_lines()
            assert _next_frame(lines) == [": connected"]

            for expected in (1, 2):
                response = httpx.post(
                    server + "/counter", headers={"FX-Request": "true"}, timeout=timeout
                )
                assert f"Count: {expected}" in response.text

                event, data = _next_frame(lines)
                assert event == "event: fixi"
                payload = json.loads(data.removeprefix("data: "))
                assert payload["target"] == "#event-log"
                assert payload["swap"] == "beforeend"
                assert f"Incremented to <b>{expected}</b>" in payload["text"]


def test_two_streams_both_receive(server):
    timeout = httpx.Timeout(10.0)
    with httpx.Client(base_url=server, timeout=timeout) as a, httpx.Client(
        base_url=server, timeout=timeout
    ) as b:
        with a.stream("GET", "/events") as s1, b.stream("GET", "/events") as s2:
            lines1, lines2 = s1.iter_lines(), s2.iter_lines()
            assert _next_frame(lines1) == [": connected"]
            assert _next_frame(lines2) == [": connected"]

            httpx.post(server + "/counter", follow_redirects=False, timeout=timeout)

            frame1 = _next_frame(lines1)
            frame2 = _next_frame(lines2)
            assert frame1 == frame2
            assert frame1[0] == "event: fixi"
