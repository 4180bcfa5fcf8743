#!/usr/bin/python3
# PNG preview of the hole toolpaths, drawn in the same orientation as the SVG
# (Y grows downward). Useful for a quick look before loading the SVG into the
# CNC software.
#
# Requires 'Pillow'.

import logging

from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)

# --- CONFIGURATION PARAMETERS ---

PREVIEW_SCALE = 25  # pixels per mm
BACKGROUND_COLOR = 'black'
PATH_COLOR = (255, 255, 255)


# --------------------------------

class PngPreview:
    def __init__(self, filename: str, scale: int = PREVIEW_SCALE):
        self.filename = filename
        self.scale = scale
        self.img = None
        self.draw = None
        self.x_min = 0.0
        self.y_min = 0.0

    def mm_to_px(self, x: float, y: float):
        return (int((x - self.x_min) * self.scale), int((y - self.y_min) * self.scale))

    def start_view(self, width: float, height: float, unit: str,
                   x: float, y: float, view_width: float, view_height: float):
        self.x_min, self.y_min = x, y
        width_px = max(1, int(view_width * self.scale))
        height_px = max(1, int(view_height * self.scale))

        self.img = Image.new('RGB', (width_px, height_px), color=BACKGROUND_COLOR)
        self.draw = ImageDraw.Draw(self.img)

    def circle(self, cx: float, cy: float, r: float):
        x1, y1 = self.mm_to_px(cx - r, cy - r)
        x2, y2 = self.mm_to_px(cx + r, cy + r)
        self.draw.ellipse((x1, y1, x2, y2), outline=PATH_COLOR, width=1)

    def end(self):
        self.img.save(self.filename)
        logger.info("Preview saved to '%s'", self.filename)
