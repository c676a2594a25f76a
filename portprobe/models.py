import threading
from dataclasses import dataclass
from typing import List, Optional

MIN_PORT = 0
MAX_PORT = 65535
DEFAULT_TIMEOUT_MS = 500
MAX_TIMEOUT_MS = 2**64 - 1
DEFAULT_WORKERS = 200


class ConfigurationError(ValueError):
    """Raised when a scan configuration cannot be run."""


@dataclass(frozen=True)
class ScanConfig:
    target: str
    start_port: int
    end_port: int
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    workers: int = DEFAULT_WORKERS

    def __post_init__(self) -> None:
        if not self.target or not self.target.strip():
            raise ConfigurationError("target must not be empty")
        for name in ("start_port", "end_port"):
            value = getattr(self, name)
            if value < MIN_PORT or value > MAX_PORT:
                raise ConfigurationError(f"{name} must be between {MIN_PORT} and {MAX_PORT}, got {value}")
        if self.start_port > self.end_port:
            raise ConfigurationError("start port must be less than or equal to end port")
        if self.timeout_ms < 0 or self.timeout_ms > MAX_TIMEOUT_MS:
            raise ConfigurationError(f"timeout must be between 0 and {MAX_TIMEOUT_MS} milliseconds")
        if self.workers < 1:
            raise ConfigurationError("workers must be >= 1")

    @property
    def ports(self) -> range:
        return range(self.start_port, self.end_port + 1)

    @property
    def port_count(self) -> int:
        return self.end_port - self.start_port + 1

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0


@dataclass(frozen=True)
class PortResult:
    port: int
    banner: Optional[str] = None


class ResultSet:
    """
    Open-port results shared by every probe thread of one scan.
    Appends are serialised by a lock; read it with sorted() once the scan has joined.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._items: List[PortResult] = []

    def add(self, result: PortResult) -> None:
        with self._lock:
            self._items.append(result)

    def sorted(self) -> List[PortResult]:
        with self._lock:
            return sorted(self._items, key=lambda r: r.port)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
