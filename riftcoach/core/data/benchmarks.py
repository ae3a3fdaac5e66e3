"""Per-phase and per-role benchmark tables for the CS and vision detectors."""

from types import MappingProxyType
from typing import NamedTuple

from riftcoach.contracts.analysis import GamePhase
from riftcoach.contracts.common import Role


class Benchmark(NamedTuple):
    good: float
    average: float
    poor: float

    def scaled(self, factor: float) -> "Benchmark":
        return Benchmark(self.good * factor, self.average * factor, self.poor * factor)


# CS per minute
CS_BENCHMARKS = MappingProxyType(
    {
        GamePhase.EARLY: Benchmark(good=7, average=6, poor=5),
        GamePhase.MID: Benchmark(good=7.5, average=6.5, poor=5.5),
        GamePhase.LATE: Benchmark(good=8, average=7, poor=6),
    }
)

# Share of the laner benchmark a role is expected to reach
CS_ROLE_FACTORS = MappingProxyType(
    {
        Role.TOP: 1.0,
        Role.JUNGLE: 1.0,
        Role.MID: 1.0,
        Role.ADC: 1.0,
        Role.SUPPORT: 0.2,
        Role.UNKNOWN: 1.0,
    }
)

# Wards placed per 5-minute window
VISION_BENCHMARKS = MappingProxyType(
    {
        GamePhase.EARLY: Benchmark(good=5, average=3, poor=1),
        GamePhase.MID: Benchmark(good=8, average=5, poor=2),
        GamePhase.LATE: Benchmark(good=10, average=6, poor=3),
    }
)

VISION_ROLE_FACTORS = MappingProxyType(
    {
        Role.TOP: 0.6,
        Role.JUNGLE: 0.6,
        Role.MID: 0.6,
        Role.ADC: 0.6,
        Role.SUPPORT: 1.0,
        Role.UNKNOWN: 0.6,
    }
)


def cs_benchmark(phase: GamePhase, role: Role) -> Benchmark:
    return CS_BENCHMARKS[phase].scaled(CS_ROLE_FACTORS[role])


def vision_benchmark(phase: GamePhase, role: Role) -> Benchmark:
    return VISION_BENCHMARKS[phase].scaled(VISION_ROLE_FACTORS[role])
