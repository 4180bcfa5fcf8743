#!/usr/bin/python3
# Reads a KiCad / Excellon drill file (.drl) and turns it into a list of holes
# in millimeters, each carrying the extra radius a milling bit must travel to
# clear the hole completely.
#
# Recognized lines: METRIC, INCH, T<n>C<dia>, T<n>, X<x>Y<y>.
# Everything else (header, comments, M-codes, slots) is ignored.
# Unit lines may also carry an Excellon zero format suffix (METRIC,TZ, INCH,LZ),
# which plain literal METRIC / INCH matching would have ignored.

import enum
import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# --- CONFIGURATION PARAMETERS ---

DEFAULT_BIT_SIZE = 0.7  # mm, diameter of the milling bit
INCH_TO_MM = 25.4
METRIC_TO_MM = 1.0
UNSET_SCALE = 0.0  # no unit directive seen yet

_NUMBER = r'([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)'

UNITS_REGEX = re.compile(r'^(METRIC|INCH)(,.*)?$')
TOOL_DEFINITION_REGEX = re.compile(r'^T(\d+)C' + _NUMBER)
TOOL_SELECTION_REGEX = re.compile(r'^T\d+$')
COORDINATE_REGEX = re.compile(r'^X' + _NUMBER + r'Y' + _NUMBER + r'$')


# --------------------------------

class Drl2SvgError(Exception):
    pass


class FatalFormatError(Drl2SvgError):
    """A tool the bit cannot cut. Aborts the whole conversion."""

    def __init__(self, line_number: int, line: str, diameter: float, bit_size: float):
        self.line_number = line_number
        self.line = line
        self.diameter = diameter
        self.bit_size = bit_size
        super().__init__(
            f"line {line_number}: unable to handle tool diameter {line!r} "
            f"({diameter:.3f} mm < {bit_size:.3f} mm bit)")


class ResourceError(Drl2SvgError):
    pass


# =========================================================================================
@dataclass(frozen=True)
class Hole:
    radius: float
    cx: float
    cy: float


@dataclass(frozen=True)
class Extent:
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0

    @classmethod
    def of_hole(cls, hole: Hole) -> 'Extent':
        return cls(hole.cx - hole.radius, hole.cx + hole.radius,
                   hole.cy - hole.radius, hole.cy + hole.radius)

    def include(self, hole: Hole) -> 'Extent':
        return Extent(min(self.left, hole.cx - hole.radius),
                      max(self.right, hole.cx + hole.radius),
                      min(self.top, hole.cy - hole.radius),
                      max(self.bottom, hole.cy + hole.radius))

    def expand(self, margin: float) -> 'Extent':
        return Extent(self.left - margin, self.right + margin,
                      self.top - margin, self.bottom + margin)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class DrillJob:
    holes: Tuple[Hole, ...]
    tools: Mapping[str, float]
    max_tool_diameter: float
    extent: Extent
    bit_size: float


class LineKind(enum.Enum):
    UNITS = 'units'
    TOOL_DEFINITION = 'tool_definition'
    TOOL_SELECTION = 'tool_selection'
    COORDINATE = 'coordinate'
    OTHER = 'other'


def classify_line(line: str, tools: Dict[str, float]) -> Tuple[LineKind, tuple]:
    """Tokenize one stripped line. First match wins."""
    units_match = UNITS_REGEX.match(line)
    if units_match:
        return LineKind.UNITS, (units_match.group(1),)

    tool_match = TOOL_DEFINITION_REGEX.match(line)
    if tool_match:
        return LineKind.TOOL_DEFINITION, (f"T{int(tool_match.group(1))}", float(tool_match.group(2)))

    if TOOL_SELECTION_REGEX.match(line) and line in tools:
        return LineKind.TOOL_SELECTION, (line,)

    coord_match = COORDINATE_REGEX.match(line)
    if coord_match:
        return LineKind.COORDINATE, (float(coord_match.group(1)), float(coord_match.group(2)))

    return LineKind.OTHER, ()


# =========================================================================================
@dataclass
class ParserState:
    scale: float = UNSET_SCALE
    tools: Dict[str, float] = field(default_factory=dict)
    cut_radius: float = 0.0
    max_tool_diameter: Optional[float] = None
    extent: Optional[Extent] = None
    holes: List[Hole] = field(default_factory=list)


class DrillParser:
    def __init__(self, bit_size: float = DEFAULT_BIT_SIZE):
        self.bit_size = bit_size
        self.state = ParserState()
        self.line_number = 0
        self._handlers = {
            LineKind.UNITS: self._set_units,
            LineKind.TOOL_DEFINITION: self._define_tool,
            LineKind.TOOL_SELECTION: self._select_tool,
            LineKind.COORDINATE: self._add_hole,
            LineKind.OTHER: self._ignore,
        }

    def feed(self, line: str):
        self.line_number += 1
        line = line.strip()
        kind, args = classify_line(line, self.state.tools)
        self._handlers[kind](line, *args)

    def _set_units(self, line: str, unit: str):
        self.state.scale = INCH_TO_MM if unit == 'INCH' else METRIC_TO_MM

    def _define_tool(self, line: str, tool: str, raw_diameter: float):
        state = self.state
        diameter = raw_diameter * state.scale
        if diameter < self.bit_size:
            raise FatalFormatError(self.line_number, line, diameter, self.bit_size)

        if state.max_tool_diameter is None or diameter > state.max_tool_diameter:
            state.max_tool_diameter = diameter
        state.tools[tool] = diameter

    def _select_tool(self, line: str, tool: str):
        self.state.cut_radius = (self.state.tools[tool] - self.bit_size) * 0.5

    def _add_hole(self, line: str, x: float, y: float):
        state = self.state
        hole = Hole(radius=state.cut_radius, cx=x * state.scale, cy=y * state.scale)
        state.extent = Extent.of_hole(hole) if state.extent is None else state.extent.include(hole)
        state.holes.append(hole)

    def _ignore(self, line: str):
        logger.debug("ignored: %r", line)

    def finish(self) -> DrillJob:
        state = self.state
        logger.debug("tools loaded: %r", state.tools)

        max_tool_diameter = state.max_tool_diameter or 0.0
        extent = state.extent if state.extent is not None else Extent()

        return DrillJob(holes=tuple(state.holes),
                        tools=MappingProxyType(dict(state.tools)),
                        max_tool_diameter=max_tool_diameter,
                        extent=extent.expand(max_tool_diameter),
                        bit_size=self.bit_size)


def parse_drill(lines: Iterable[str], bit_size: float = DEFAULT_BIT_SIZE) -> DrillJob:
    parser = DrillParser(bit_size)
    for line in lines:
        parser.feed(line)
    return parser.finish()
