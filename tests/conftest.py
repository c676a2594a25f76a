import socket
import threading

import pytest


class LoopbackServer:
    """Accepts connections on 127.0.0.1, optionally greets, and records what clients send."""

    def __init__(self, greeting: bytes = b""):
        self.greeting = greeting
        self.received = []
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(16)
        self._sock.settimeout(0.2)
        self.port = self._sock.getsockname()[1]
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self):
        self._thread.start()
        return self

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                if self.greeting:
                    conn.sendall(self.greeting)
                conn.settimeout(0.3)
                try:
                    data = conn.recv(4096)
                except OSError:
                    data = b""
                if data:
                    self.received.append(data)

    def close(self):
        self._stop.set()
        self._thread.join(timeout=2)
        self._sock.close()


@pytest.fixture
def tcp_server():
    servers = []

    def _start(greeting: bytes = b"") -> LoopbackServer:
        server = LoopbackServer(greeting).start()
        servers.append(server)
        return server

    yield _start

    for server in servers:
        server.close()


@pytest.fixture
def closed_port():
    # Bind then release: nothing listens on the port afterwards.
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port
