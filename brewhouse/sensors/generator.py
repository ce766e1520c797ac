"""
Synthetic brewhouse sensor readings.

Each process has a channel profile. A reading is the channel's nominal value
plus a slow sinusoidal drift and Gaussian noise, clamped to the channel range.
"""

import math
import random
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from brewhouse.models import ProcessSet


@dataclass(frozen=True)
class ChannelConfig:
    """Configuration for a single sensor channel."""
    name: str
    unit: str
    nominal: float
    min_val: float
    max_val: float
    noise_std: float = 0.1
    drift: float = 0.0            # amplitude of the slow drift
    period: float = 600.0         # seconds per drift cycle


GENERIC_PROFILE: List[ChannelConfig] = [
    ChannelConfig("temperatur", "°C",  20.0, 0.0, 105.0, noise_std=0.3, drift=1.0),
    ChannelConfig("druck",      "bar",  1.0, 0.0,   3.0, noise_std=0.02, drift=0.05),
    ChannelConfig("ph",         "pH",   5.2, 3.0,   7.0, noise_std=0.03, drift=0.05),
]

PROFILES: Dict[str, List[ChannelConfig]] = {
    "gaerung": [
        ChannelConfig("temperatur", "°C",  18.0, 8.0,  25.0, noise_std=0.2,  drift=0.8, period=900),
        ChannelConfig("druck",      "bar",  1.2, 0.8,   2.5, noise_std=0.02, drift=0.1, period=1200),
        ChannelConfig("ph",         "pH",   4.4, 3.8,   5.5, noise_std=0.02, drift=0.1, period=1800),
        ChannelConfig("suess",      "°P",   6.5, 0.0,  16.0, noise_std=0.1,  drift=0.5, period=1800),
        ChannelConfig("sauer",      "g/l",  1.8, 0.0,   4.0, noise_std=0.05, drift=0.2, period=1800),
    ],
    "maischen": [
        ChannelConfig("temperatur", "°C",  65.0, 35.0, 78.0, noise_std=0.4,  drift=3.0, period=600),
        ChannelConfig("druck",      "bar",  1.0, 0.9,   1.3, noise_std=0.01, drift=0.02),
        ChannelConfig("ph",         "pH",   5.4, 5.0,   5.9, noise_std=0.02, drift=0.05),
    ],
    "hopfenkochen": [
        ChannelConfig("temperatur", "°C",  99.5, 90.0, 102.0, noise_std=0.3, drift=0.5, period=300),
        ChannelConfig("druck",      "bar",  1.05, 0.9,   1.5, noise_std=0.02, drift=0.03),
        ChannelConfig("ph",         "pH",   5.2, 4.9,   5.6, noise_std=0.02, drift=0.04),
    ],
}


class MeasurementGenerator:
    """Produces a plausible reading for a known process on demand."""

    def __init__(self,
                 processes: Iterable[str],
                 seed: Optional[int] = None,
                 clock: Callable[[], float] = time.time,
                 profiles: Optional[Dict[str, List[ChannelConfig]]] = None):
        self.processes = processes if isinstance(processes, ProcessSet) else ProcessSet(processes)
        self.profiles = PROFILES if profiles is None else profiles
        self._rng = random.Random(seed)
        self._clock = clock

    def channels(self, process: str) -> List[ChannelConfig]:
        self.processes.require(process)
        return self.profiles.get(process, GENERIC_PROFILE)

    def generate(self, process: str) -> Dict[str, float]:
        now = self._clock()
        return {ch.name: self._sample(ch, now) for ch in self.channels(process)}

    def _sample(self, ch: ChannelConfig, now: float) -> float:
        value = ch.nominal
        if ch.drift:
            value += ch.drift * math.sin(2 * math.pi * now / ch.period)
        value += self._rng.gauss(0.0, ch.noise_std)
        return round(min(ch.max_val, max(ch.min_val, value)), 2)
