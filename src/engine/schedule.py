from dataclasses import dataclass
from typing import List

import numpy as np


@dataclass(frozen=True)
class SliceSchedule:
    indices: List[int]
    volumes: List[float] | None = None   # only for volume-weighted strategies


def slice_indices(n: int, slice_count: int) -> List[int]:
    """
    Spread slice_count execution points over a series of length n:
      idx_i = floor(i * n / slice_count)
    Indices repeat when slice_count > n.
    """
    if n < 1 or slice_count < 1:
        return []
    return [(i * n) // slice_count for i in range(slice_count)]


def synthetic_volumes(slice_count: int, rng: np.random.Generator) -> List[float]:
    # stand-in for traded volume; offset keeps every weight >= 0.5
    return [float(v) + 0.5 for v in rng.random(slice_count)]


def build_schedule(
    n: int,
    slice_count: int,
    rng: np.random.Generator,
    with_volumes: bool = False,
) -> SliceSchedule:
    indices = slice_indices(n, slice_count)
    volumes = synthetic_volumes(len(indices), rng) if with_volumes else None
    return SliceSchedule(indices=indices, volumes=volumes)
