"""
Sample data generator for testing.

Generates CORNEA-format exports of an ideal spherical cornea.
"""

from pathlib import Path
from typing import Optional

import numpy as np


def generate_cornea_lines(
    n_meridians: int = 32,
    n_rings: int = 20,
    apex_radius_mm: float = 7.8,
    max_radius_mm: float = 4.0,
    noise_mm: float = 0.0,
    seed: Optional[int] = None,
    with_header: bool = True,
) -> list[str]:
    """
    Build the lines of a CORNEA export for a spherical cap.

    Every meridian is sampled at n_rings radii from the apex out to
    max_radius_mm. Depth is the sagitta R - sqrt(R^2 - r^2), written as an
    unsigned magnitude like the device does.
    """
    if max_radius_mm >= apex_radius_mm:
        raise ValueError("max_radius_mm must be smaller than apex_radius_mm")

    rng = np.random.default_rng(seed)
    radii = np.linspace(0.0, max_radius_mm, n_rings)
    sagitta = apex_radius_mm - np.sqrt(apex_radius_mm**2 - radii**2)

    lines = []
    if with_header:
        lines.append("CORNEA")
        lines.append("Keratograph height data")
        lines.append(f"Meridians: {n_meridians}  Rings: {n_rings}")
        lines.append("")

    for seg in range(n_meridians):
        depth = sagitta
        if noise_mm > 0:
            depth = np.abs(sagitta + rng.normal(0, noise_mm, n_rings))
        for r, d in zip(radii, depth):
            lines.append(f"Seg: {seg:3d}   y= {r:8.4f}   x= {d:8.4f}")

    if with_header:
        lines.append("")
        lines.append("END")

    return lines


def generate_cornea_export(
    output_path: Path,
    n_meridians: int = 32,
    n_rings: int = 20,
    apex_radius_mm: float = 7.8,
    max_radius_mm: float = 4.0,
    noise_mm: float = 0.0,
    seed: Optional[int] = None,
) -> Path:
    """
    Write a spherical-cap CORNEA export (use a .OD or .OS file name).
    """
    lines = generate_cornea_lines(
        n_meridians=n_meridians,
        n_rings=n_rings,
        apex_radius_mm=apex_radius_mm,
        max_radius_mm=max_radius_mm,
        noise_mm=noise_mm,
        seed=seed,
    )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        f.write('\n'.join(lines))

    return output_path
