import threading

import pytest

from portprobe.models import ConfigurationError, PortResult, ResultSet, ScanConfig


class TestScanConfig:
    def test_defaults_and_derived_values(self):
        config = ScanConfig(target="127.0.0.1", start_port=20, end_port=25)

        assert config.timeout_ms == 500
        assert config.workers == 200
        assert list(config.ports) == [20, 21, 22, 23, 24, 25]
        assert config.port_count == 6
        assert config.timeout_s == 0.5

    def test_single_port_range(self):
        config = ScanConfig(target="localhost", start_port=22, end_port=22)
        assert list(config.ports) == [22]

    def test_start_after_end_rejected(self):
        with pytest.raises(ConfigurationError, match="start port must be less than or equal to end port"):
            ScanConfig(target="127.0.0.1", start_port=100, end_port=1)

    @pytest.mark.parametrize("start,end", [(-1, 10), (1, 65536), (70000, 70001)])
    def test_port_out_of_range_rejected(self, start, end):
        with pytest.raises(ConfigurationError):
            ScanConfig(target="127.0.0.1", start_port=start, end_port=end)

    def test_bad_workers_and_timeout_rejected(self):
        with pytest.raises(ConfigurationError):
            ScanConfig(target="127.0.0.1", start_port=1, end_port=2, workers=0)
        with pytest.raises(ConfigurationError):
            ScanConfig(target="127.0.0.1", start_port=1, end_port=2, timeout_ms=-5)

    def test_timeout_covers_unsigned_64_bit_range(self):
        config = ScanConfig(target="127.0.0.1", start_port=1, end_port=2, timeout_ms=2**64 - 1)
        assert config.timeout_ms == 2**64 - 1
        with pytest.raises(ConfigurationError):
            ScanConfig(target="127.0.0.1", start_port=1, end_port=2, timeout_ms=2**64)

    def test_empty_target_rejected(self):
        with pytest.raises(ConfigurationError):
            ScanConfig(target="  ", start_port=1, end_port=2)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_config_is_immutable(self):
        config = ScanConfig(target="127.0.0.1", start_port=1, end_port=2)
        with pytest.raises(AttributeError):
            config.end_port = 10


class TestResultSet:
    def test_sorted_by_port(self):
        results = ResultSet()
        for port in (443, 22, 8080, 80):
            results.add(PortResult(port=port))

        assert [r.port for r in results.sorted()] == [22, 80, 443, 8080]
        assert len(results) == 4

    def test_concurrent_appends_are_all_kept(self):
        results = ResultSet()

        def add_range(offset):
            for i in range(200):
                results.add(PortResult(port=offset + i, banner=None))

        threads = [threading.Thread(target=add_range, args=(n * 1000,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ports = [r.port for r in results.sorted()]
        assert len(ports) == 1600
        assert ports == sorted(set(ports))
