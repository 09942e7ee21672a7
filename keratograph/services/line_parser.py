"""
OCULUS Keratograph CORNEA line parser.

Each data line of a CORNEA export carries one surface sample:

    Seg: 12   y= 3.5   x= 7.25

`Seg:` is the meridian index, `y=` the radial distance from the apex and
`x=` the (unsigned) depth. Header and footer lines around the data block do
not match the pattern.

Lines are matched textually first and converted afterwards, so a line can
have the right shape but a bad token (`Seg: abc ...`). What happens to such
lines, and to lines that do not match at all, depends on the LinePolicy.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from keratograph.models.cornea import CylindricalPoints
from keratograph.models.errors import InvalidLinePolicyError, MalformedLineError, NonNumericFieldError


logger = logging.getLogger(__name__)


LINE_PATTERN = (
    r"^\s*Seg:\s*(?P<segment>\S+?)"
    r"\s*y=\s*(?P<radial_distance>\S+?)"
    r"\s*x=\s*(?P<depth>\S+?)\s*$"
)
SEGMENT_PATTERN = r"[0-9]+"
SEGMENT_LIMIT = 2.0**63  # first value that does not fit int64

DEFAULT_LINE_POLICY = os.getenv("KERATOGRAPH_LINE_POLICY", "skip")


class LinePolicy(Enum):
    """What to do with lines that are not valid segment records."""

    SKIP = "skip"       # drop and count them
    FAIL_FAST = "fail"  # raise on the first one

    @classmethod
    def coerce(cls, value: Union["LinePolicy", str, None]) -> "LinePolicy":
        if value is None:
            value = DEFAULT_LINE_POLICY
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("fail_fast", "fail-fast", "strict"):
            key = "fail"
        try:
            return cls(key)
        except ValueError:
            raise InvalidLinePolicyError(f"Unknown line policy: {value!r} (expected 'skip' or 'fail')")


@dataclass(frozen=True, eq=False)
class ParseResult:
    """Parsed records plus how many non-blank lines were dropped."""

    points: CylindricalPoints
    skipped_lines: int = 0
    total_lines: int = 0


def parse_lines(
    lines: Union[Iterable[str], str],
    policy: Union[LinePolicy, str, None] = None,
) -> ParseResult:
    """
    Parse CORNEA export lines into cylindrical points.

    Args:
        lines: Export lines in file order. A single string is split on
            line breaks.
        policy: LinePolicy (or "skip" / "fail"). Defaults to
            KERATOGRAPH_LINE_POLICY, which defaults to "skip".

    Returns:
        ParseResult with the records in input order.

    Raises:
        MalformedLineError: under FAIL_FAST, for the first non-blank line
            that is not a segment record.
        NonNumericFieldError: under FAIL_FAST, for the first segment record
            with a token that is not a valid number, or with a negative
            radial distance.
    """
    policy = LinePolicy.coerce(policy)
    if isinstance(lines, str):
        lines = lines.splitlines()

    series = pd.Series(list(lines), dtype=object)
    total = len(series)
    if total == 0:
        return ParseResult(points=CylindricalPoints.empty())

    series = series.astype(str)
    blank = (series.str.strip() == "").to_numpy(dtype=bool)

    fields = series.str.extract(LINE_PATTERN)
    matched = fields["segment"].notna().to_numpy(dtype=bool)

    segment = _to_float(fields["segment"])
    radial_distance = _to_float(fields["radial_distance"])
    depth = _to_float(fields["depth"])

    # ASCII digits only, and the value must fit int64
    field_ok = {
        "segment": (
            fields["segment"].fillna("").str.fullmatch(SEGMENT_PATTERN).to_numpy(dtype=bool)
            & np.isfinite(segment)
            & (segment < SEGMENT_LIMIT)
        ),
        "radial_distance": np.isfinite(radial_distance) & (radial_distance >= 0),
        "depth": np.isfinite(depth),  # sign not checked
    }

    valid = matched & field_ok["segment"] & field_ok["radial_distance"] & field_ok["depth"]
    rejected = ~blank & ~valid

    if policy is LinePolicy.FAIL_FAST and rejected.any():
        idx = int(np.argmax(rejected))
        _raise_for_line(
            idx,
            series.iloc[idx],
            fields.iloc[idx],
            matched[idx],
            {name: bool(ok[idx]) for name, ok in field_ok.items()},
        )

    skipped = int(rejected.sum())
    if skipped:
        logger.warning(f"Skipped {skipped} of {total} lines that are not segment records")

    points = CylindricalPoints(
        segment=segment[valid].astype(np.int64),
        radial_distance=radial_distance[valid],
        depth=depth[valid],
    )
    logger.debug(f"Parsed {len(points)} segment records from {total} lines")
    return ParseResult(points=points, skipped_lines=skipped, total_lines=total)


def parse_line(line: str) -> tuple[int, float, float]:
    """
    Parse a single segment record.

    Returns:
        (segment, radial_distance, depth)

    Raises:
        MalformedLineError / NonNumericFieldError
    """
    points = parse_lines([line], LinePolicy.FAIL_FAST).points
    if len(points) == 0:
        raise MalformedLineError(1, line)
    return int(points.segment[0]), float(points.radial_distance[0]), float(points.depth[0])


def _to_float(column: pd.Series) -> NDArray[np.float64]:
    return pd.to_numeric(column, errors="coerce").to_numpy(dtype=np.float64)


def _raise_for_line(
    idx: int,
    line: str,
    row: pd.Series,
    matched: bool,
    field_ok: dict[str, bool],
) -> None:
    line_number = idx + 1
    if not matched:
        raise MalformedLineError(line_number, line)
    for name in ("segment", "radial_distance", "depth"):
        if not field_ok[name]:
            raise NonNumericFieldError(line_number, line, name, row[name])
    raise MalformedLineError(line_number, line)
