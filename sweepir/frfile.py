"""Reader for microphone frequency response calibration files."""

from __future__ import annotations

import os
import re
from typing import Union

_LINE = re.compile(r"(([0-9]*[.])?[0-9]+)\t([+-]?([0-9]*[.])?[0-9]+)")

MIN_FREQUENCY = 19.5
MAX_FREQUENCY = 20600.0


def read_fr_file(path: Union[str, os.PathLike]) -> dict[float, float]:
    """Read tab-separated frequency/gain pairs as frequency -> correction.

    The correction is the negated gain. Lines starting with ``#`` are skipped,
    and frequencies outside the audible range are dropped. A file that cannot
    be opened yields an empty mapping.
    """
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError:
        return {}

    points: dict[float, float] = {}
    with handle:
        for line in handle:
            if line.startswith("#"):
                continue
            match = _LINE.search(line)
            if match:
                points[float(match.group(1))] = -float(match.group(3))

    return {frequency: gain for frequency, gain in sorted(points.items())
            if MIN_FREQUENCY <= frequency <= MAX_FREQUENCY}