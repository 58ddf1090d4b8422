"""Sine-sweep impulse-response deconvolution, biquad equalization and looping playback."""

__version__ = "0.1.0"