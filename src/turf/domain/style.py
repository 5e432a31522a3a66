from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ShapeStyle:
    color: str
    weight: int
    opacity: float
    fill_opacity: float
    dash_array: Optional[str] = None  # None means solid

    @property
    def dashed(self) -> bool:
        return self.dash_array is not None
