import math

import numpy as np
import pytest

from sweepir.buffer import AudioBuffer, OpenMode


def _payload(values):
    return np.asarray(values, dtype="<f4").tobytes()


def _writer():
    buf = AudioBuffer(OpenMode.WRITE_ONLY)
    buf.start()
    return buf


def test_write_stores_samples_and_returns_length():
    buf = _writer()
    payload = _payload([0.25, -0.5, 0.75])
    assert buf.write(payload) == len(payload)
    np.testing.assert_array_equal(buf.data, np.array([0.25, -0.5, 0.75], dtype=np.float32))


def test_write_appends_and_restart_truncates():
    buf = _writer()
    buf.write(_payload([1.0, 2.0]))
    buf.write(_payload([3.0]))
    np.testing.assert_array_equal(buf.data, np.array([1.0, 2.0, 3.0], dtype=np.float32))
    buf.start()
    buf.write(_payload([9.0]))
    np.testing.assert_array_equal(buf.data, np.array([9.0], dtype=np.float32))


def test_write_rejects_partial_sample():
    buf = _writer()
    with pytest.raises(ValueError):
        buf.write(b"\x00\x00\x00")


def test_read_round_trip():
    buf = AudioBuffer(OpenMode.READ_ONLY)
    values = np.array([0.1, 0.2, 0.3], dtype=np.float32)
    buf.data = values.copy()
    buf.start()
    first = np.frombuffer(buf.read(8), dtype="<f4")
    rest = np.frombuffer(buf.read(1024), dtype="<f4")
    np.testing.assert_array_equal(first, values[:2])
    np.testing.assert_array_equal(rest, values[2:])


def test_read_rejects_unaligned_length():
    buf = AudioBuffer(OpenMode.READ_ONLY)
    buf.start()
    with pytest.raises(ValueError):
        buf.read(6)


def test_read_signals_when_empty():
    calls = []
    buf = AudioBuffer(OpenMode.READ_ONLY, on_ran_empty=lambda: calls.append(True))
    buf.data = np.array([0.5], dtype=np.float32)
    buf.start()
    assert len(buf.read(4)) == 4
    assert calls == []
    assert buf.read(4) == b""
    assert calls == [True]


def test_read_requires_open_buffer():
    buf = AudioBuffer(OpenMode.READ_ONLY)
    with pytest.raises(ValueError):
        buf.read(4)


def test_read_rejected_on_write_only_buffer():
    buf = _writer()
    with pytest.raises(ValueError):
        buf.read(4)


def test_level_reports_peak_and_resets():
    buf = _writer()
    buf.write(_payload([0.5, -1.0]))
    assert buf.level() == pytest.approx(0.0)
    assert buf.level() == -math.inf


def test_level_of_half_scale():
    buf = _writer()
    buf.write(_payload([0.5, -0.25]))
    assert buf.level() == pytest.approx(20 * math.log10(0.5))


def test_stop_closes_buffer():
    buf = _writer()
    assert buf.is_open
    buf.stop()
    assert not buf.is_open
    with pytest.raises(ValueError):
        buf.write(_payload([1.0]))