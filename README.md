# sweepir

A library for measuring impulse responses with an exponential sine sweep
and for looping audio playback through a biquad equalizer. It works on
numpy arrays. You supply the audio samples and pass them to the package
yourself.

## Measurement

- `sweepir.buffer.AudioBuffer` holds float samples in `data`. It reads and
  writes them as little-endian 32-bit bytes (`read`, `write`). Open it for
  reading or writing with `OpenMode`, and call `start` and `stop`. `level()`
  returns the peak written since the last call, in dBFS, and resets it.
  `on_ran_empty` is called when a read finds nothing left.
- `sweepir.signal.Signal` and `ResponseSignal` view a buffer at a given
  sample rate. `resample` converts the samples with polyphase resampling.
  `Channels` selects the left channel, the right channel or both.
- `sweepir.generator.create_sine_sweep` fills a buffer with an interleaved
  stereo exponential sweep, with silent frames before and after it.
  - It returns an `ExcitationSignal`, which offers `fade_in`, `fade_out`
    (Hann half-windows) and `set_volume` (in dB).
  - `sine_sweep`, `window`, `fade_in`, `fade_out`, `volume` and
    `volume_envelope` apply the same operations in place to interleaved
    arrays.
- `sweepir.inverse.from_excitation` builds the `InverseSignal`. This is the
  time-reversed sweep with a falling amplitude envelope of 3 dB per octave.
- `sweepir.farina.Farina` regenerates the sweep when its settings change.
  Its settings are `channels`, `sample_rate`, `begin_frequency`,
  `end_frequency`, `duration_per_octave` in ms, and `level` in dB.
  - The sweep fades in over one octave and fades out over 1/24 octave.
  - `impulse_response` deconvolves a recording.
  - `compute_ir(measured, inverse)` does the same FFT deconvolution on its
    own.
- `sweepir.frfile.read_fr_file` reads a tab-separated "frequency gain"
  calibration file into `{frequency: -gain}`.
  - Lines starting with `#` are skipped.
  - Frequencies outside 19.5 Hz – 20.6 kHz are dropped.
  - A file that cannot be opened gives `{}`.
- `sweepir.errors.error_to_string` turns an `AudioError` into a short
  message and a description. It returns empty strings for errors that are
  not reported.

```python
import numpy as np

from sweepir.buffer import AudioBuffer, OpenMode
from sweepir.farina import Farina

output = AudioBuffer(OpenMode.READ_ONLY)
farina = Farina(output)
farina.sample_rate = 48000
farina.duration_per_octave = 250      # ms per octave
farina.level = -6                     # dB

sweep = farina.excitation_signal()    # interleaved stereo in output.data

# ... play output.data, record the response as mono float samples ...
recorded = np.asarray(recorded_samples, dtype=np.float32)

ir = farina.impulse_response(recorded)
```

## Playback with equalizer

- `sweepir.nodes` provides a small push-based graph:
  - `Node` has `attach`, `process` and `render`.
  - `NodeGraph` ends in an `endpoint`.
  - `Engine` is a graph with a `sample_rate`.
- `sweepir.filters` provides `FilterConfig`, `FilterType` and
  `StandardSampleRate`.
  - `biquad_coefficients` computes single-precision coefficients for peak,
    low/high-pass and low/high-shelf filters.
  - `FilterNode` filters each channel and keeps its state between blocks.
    `assign` recomputes the coefficients only when the config changes.
- `sweepir.equalizer.Equalizer` chains filter nodes between an input node and
  an output node.
  - It offers `add_filter`, `set_filters` and `process`.
  - In `set_filters`, filters beyond the given list are set to pass through.
- `sweepir.sound.Sound` plays decoded frames from a cursor, with loop points
  and `seek_to`. `advance(frames)` pushes audio through the attached nodes
  and returns it.
- `sweepir.player.Player` implements `PlayerInterface`. It plays one looping
  sound through the equalizer into the engine.
  - `set_filters` takes objects with `type`, `f`, `q` and `g`.
  - `set_equalizer_enabled(False)` routes the sound straight to the engine.
- `sweepir.player_model.PlayerModel` is a view model over a player. It
  provides:
  - play/pause with a progress ticker;
  - loop range and progress within it;
  - a title taken from tags or from the file name;
  - the last sample, remembered in a settings mapping by `close()`.
- `sweepir.player_bar.PlayerBarModel` shows either the loop range, formatted
  by `format_mm_ss`, or the sweep frequency range. The sweep range comes from
  a measure model that you pass in.

```python
import numpy as np

from sweepir.filters import FilterConfig, FilterType
from sweepir.player import Player
from sweepir.sound import Sound

player = Player()
frames = np.zeros((48000, 2), dtype=np.float32)
player.set_file("sample.wav", Sound(player.engine, frames, 48000))
player.equalizer.set_filters([FilterConfig(FilterType.PEAK, 1000.0, 1.0, -6.0, 48000)])
player.start()
block = player.sound.advance(512)     # (512, 2) equalized frames
```

## Icons

- `sweepir.icons.load_glyphs` reads glyph names and path data from an SVG
  icon font. It raises `GlyphFontError` on bad input.
- `icon_svg` and `icon` wrap one glyph in a standalone SVG document in a given
  colour.

## What it does not do

- There is no audio device access: no playing or recording, and no device
  listing.
- There is no file decoding. `Sound` takes frames that you have already
  decoded.
- There is no storage of measurements, and no frequency-response analysis
  of an impulse response.
- There is no measurement session that runs play, record and deconvolve for
  you.
- There is no command-line program and no graphical interface. The view
  models are plain objects with listener lists.

## Installing

```
pip install sweepir
```

To run the tests:

```
pip install "sweepir[test]"
pytest
```