import random
from typing import Optional, Sequence

DEFAULT_PALETTE = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#DDA0DD",
    "#98D8C8",
    "#F7DC6F",
)


class ColorPalette:
    """
    Fixed palette; new territories get a uniform-random pick.
    """

    def __init__(self, colors: Sequence[str] = DEFAULT_PALETTE, rng: Optional[random.Random] = None):
        if not colors:
            raise ValueError("Palette must contain at least one color")
        self.colors = tuple(colors)
        self._rng = rng or random.Random()

    def pick(self) -> str:
        return self._rng.choice(self.colors)

    def __contains__(self, color: str) -> bool:
        return color in self.colors
