"""Loopback helpers shared by the test modules."""
import socket
import threading

from dropbench import Sink, get_codec, listen


class SinkThread:
    """Runs a Sink on an ephemeral loopback port in a background thread."""

    def __init__(self, encoding="msgpack", **sink_kwargs):
        sink_kwargs.setdefault("keep", True)
        self.sink = Sink(get_codec(encoding), **sink_kwargs)
        self.listener = listen("127.0.0.1", 0)
        self.port = self.listener.getsockname()[1]
        self.stats = None
        self.error = None
        self._thread = threading.Thread(target=self._run, daemon=True)

    def _run(self):
        try:
            self.stats = self.sink.serve_one(self.listener)
        except Exception as err:  # surfaced by join()
            self.error = err

    def __enter__(self):
        self.listener.settimeout(5.0)
        self._thread.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.join()

    def join(self, timeout=5.0):
        self._thread.join(timeout)
        self.listener.close()
        if self.error is not None:
            raise self.error
        return self.stats

    @property
    def records(self):
        return self.sink.records


class RawReceiver:
    """Accepts one connection and keeps every received byte."""

    def __init__(self):
        self.listener = listen("127.0.0.1", 0)
        self.listener.settimeout(5.0)
        self.port = self.listener.getsockname()[1]
        self.data = b""
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        conn, _ = self.listener.accept()
        with conn:
            chunks = []
            while True:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        self.data = b"".join(chunks)

    def join(self, timeout=5.0):
        self._thread.join(timeout)
        self.listener.close()
        return self.data


class FakeSocket:
    """
    Stand-in for a connected socket. Accepts at most ``max_chunk`` bytes per
    send() call, and fails on send call number ``fail_on_call`` (1 based).
    """

    def __init__(self, max_chunk=None, fail_on_call=None, error=None, zero_on_call=None):
        self.max_chunk = max_chunk
        self.fail_on_call = fail_on_call
        self.zero_on_call = zero_on_call
        self.error = error or BrokenPipeError(32, "Broken pipe")
        self.calls = 0
        self.chunks = []

    def send(self, data):
        self.calls += 1
        if self.calls == self.fail_on_call:
            raise self.error
        if self.calls == self.zero_on_call:
            return 0
        chunk = bytes(data if self.max_chunk is None else data[:self.max_chunk])
        self.chunks.append(chunk)
        return len(chunk)

    @property
    def data(self):
        return b"".join(self.chunks)


def free_port():
    """A loopback port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
