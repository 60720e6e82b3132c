from __future__ import annotations

from typing import NamedTuple


class RGB(NamedTuple):
    """Color with float channels on the 0..255 scale."""
    r: float
    g: float
    b: float

    def to_hex(self) -> str:
        """'#rrggbb' string; channels are rounded and clamped for display."""
        channels = (min(255, max(0, round(c))) for c in self)
        return "#" + "".join(f"{c:02x}" for c in channels)


DISABLED_COLOR = RGB(255.0, 170.0, 170.0)
ENABLED_COLOR = RGB(160.0, 196.0, 255.0)


def color_for(output: float, disabled: RGB = DISABLED_COLOR, enabled: RGB = ENABLED_COLOR) -> RGB:
    """
    Linear interpolation between `disabled` (output 0) and `enabled` (output 1).

    Outputs outside [0, 1] extrapolate past the endpoints; nothing is clamped.
    """
    return RGB(*(lo + output * (hi - lo) for lo, hi in zip(disabled, enabled)))
