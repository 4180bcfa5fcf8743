#!/usr/bin/python3
# Concentric circle toolpaths for clearing a hole wider than the milling bit.
#
# Starting at the hole's cut radius, step inward by 45% of the bit diameter
# until nothing is left, then cut from the center outward. Each ring overlaps
# the previous one by more than half a bit width, so no loose annulus is left
# to snag the bit.

import math
from typing import Iterator, List, Tuple

import numpy as np

from drill_parser import DrillJob, Hole

# --- CONFIGURATION PARAMETERS ---

STEP_FRACTION = 0.45  # ring spacing, as a fraction of the bit diameter


# --------------------------------

def concentric_radii(cut_radius: float, bit_size: float, step_fraction: float = STEP_FRACTION) -> List[float]:
    """Radii to cut for one hole, innermost first. Empty when cut_radius <= 0."""
    step = step_fraction * bit_size
    if not math.isfinite(step) or step <= 0:
        raise ValueError(f"ring step must be a positive finite number, got {step!r} (bit size {bit_size!r})")
    if cut_radius <= 0:
        return []

    count = int(np.ceil(cut_radius / step)) + 1
    radii = cut_radius - step * np.arange(count)
    radii = radii[radii > 0]
    return radii[::-1].tolist()


def hole_paths(job: DrillJob) -> Iterator[Tuple[Hole, List[float]]]:
    for hole in job.holes:
        yield hole, concentric_radii(hole.radius, job.bit_size)
