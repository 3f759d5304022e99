#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/color.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

def parse_hex_color(hex_str):
    """
    Parse a hex color string to an (r, g, b) tuple.
    Accepts: '#RRGGBB' or 'RRGGBB' (case-insensitive).
    Returns: (r, g, b) tuple with values 0-255, or None on failure.
    """
    if hex_str is None:
        return None
    val = str(hex_str).strip().lstrip('#')
    if len(val) != 6:
        return None
    try:
        r = int(val[0:2], 16)
        g = int(val[2:4], 16)
        b = int(val[4:6], 16)
        return (r, g, b)
    except ValueError:
        return None


class Color:
    """
    RGB color with 0-255 channels.

    Built from a 0xRRGGBB integer, a '#RRGGBB' string, an (r, g, b) tuple
    or another Color.
    """
    __slots__ = ('r', 'g', 'b')

    def __init__(self, value=0xFFFFFF):
        self.r, self.g, self.b = _coerce_rgb(value)

    def __repr__(self):
        return f"Color({self.hex_string()})"

    def __eq__(self, other):
        if isinstance(other, Color):
            return (self.r, self.g, self.b) == (other.r, other.g, other.b)
        return NotImplemented

    __hash__ = None

    def set(self, value) -> 'Color':
        self.r, self.g, self.b = _coerce_rgb(value)
        return self

    def copy(self) -> 'Color':
        return Color((self.r, self.g, self.b))

    def to_hex(self) -> int:
        return (self.r << 16) | (self.g << 8) | self.b

    def hex_string(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def _coerce_rgb(value):
    if isinstance(value, Color):
        return (value.r, value.g, value.b)
    if isinstance(value, bool):
        raise TypeError("Color value cannot be a bool")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"Color value out of range: {value:#x}")
        return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
    if isinstance(value, str):
        rgb = parse_hex_color(value)
        if rgb is None:
            raise ValueError(f"Invalid hex color: {value!r}")
        return rgb
    if isinstance(value, (list, tuple)) and len(value) == 3:
        r, g, b = (max(0, min(255, int(c))) for c in value)
        return (r, g, b)
    raise TypeError(f"Unsupported color value: {value!r}")
