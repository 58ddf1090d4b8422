import numpy as np

from sweepir.buffer import AudioBuffer, OpenMode
from sweepir.generator import ExcitationSignal, create_sine_sweep
from sweepir.inverse import InverseSignal, from_excitation
from sweepir.signal import Channels


def _buffer(values):
    buf = AudioBuffer(OpenMode.READ_ONLY)
    buf.data = np.asarray(values, dtype=np.float32)
    return buf


def test_default_inverse_is_empty():
    assert len(InverseSignal().data) == 0


def test_flat_range_reverses_left_channel():
    values = np.arange(12, dtype=np.float32)
    sig = ExcitationSignal(_buffer(values), min_f=100.0, max_f=100.0)
    inverse = from_excitation(sig)
    np.testing.assert_array_equal(inverse.data, values[0::2][::-1])


def test_right_channel_is_used_for_right_signal():
    values = np.arange(12, dtype=np.float32)
    sig = ExcitationSignal(_buffer(values), channels=Channels.RIGHT, min_f=100.0, max_f=100.0)
    inverse = from_excitation(sig)
    np.testing.assert_array_equal(inverse.data, values[1::2][::-1])


def test_envelope_decays_between_offsets():
    sig = ExcitationSignal(_buffer(np.ones(40)), min_f=20.0, max_f=40.0,
                           samples_offset_front=2, samples_offset_back=1)
    data = from_excitation(sig).data
    assert len(data) == 20
    np.testing.assert_array_equal(data[:3], 1.0)
    assert data[-1] == 1.0
    middle = data[2:19]
    assert np.all(np.diff(middle) < 0)
    assert middle[-1] > 0.5


def test_inverse_does_not_alter_excitation():
    buf = _buffer([])
    sig = create_sine_sweep(buf, Channels.LEFT, 1000, 10.0, 40.0, 50)
    before = buf.data.copy()
    inverse = from_excitation(sig)
    np.testing.assert_array_equal(buf.data, before)
    assert len(inverse.data) == len(before) // 2