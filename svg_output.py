#!/usr/bin/python3
# SVG output for the concentric hole toolpaths.
# The drawing is sized in mm and the viewBox uses mm user units, so the file
# can be loaded 1:1 into the CNC software.
#
# The whole document is built in memory; nothing touches the destination until
# write() is called on a finished drawing.
#
# Requires 'svgwrite'.

import io
from typing import TextIO

import svgwrite

# --- CONFIGURATION PARAMETERS ---

SVG_DECIMALS = 3
STROKE_COLOR = "black"
STROKE_WIDTH = 0.01  # mm, hairline; the bit sets the real cut width


# --------------------------------

class SvgCanvas:
    def __init__(self, decimals: int = SVG_DECIMALS):
        self.decimals = decimals
        self.drawing = None
        self.text = None

    def _num(self, value: float) -> float:
        return round(value, self.decimals)

    def start_view(self, width: float, height: float, unit: str,
                   x: float, y: float, view_width: float, view_height: float):
        self.drawing = svgwrite.Drawing(size=(f"{self._num(width)}{unit}", f"{self._num(height)}{unit}"))
        self.drawing.viewbox(self._num(x), self._num(y), self._num(view_width), self._num(view_height))

    def circle(self, cx: float, cy: float, r: float):
        self.drawing.add(self.drawing.circle(center=(self._num(cx), self._num(cy)), r=self._num(r),
                                             fill="none", stroke=STROKE_COLOR, stroke_width=STROKE_WIDTH))

    def end(self):
        buf = io.StringIO()
        self.drawing.write(buf, pretty=True)
        buf.write("\n")
        self.text = buf.getvalue()

    def write(self, stream: TextIO):
        stream.write(self.text)
