from enum import Enum

import numpy as np

# Densities at or below the low bound are black, at or above the high bound white
BONE_WINDOW = (0.55, 0.95)


class TransferPreset(Enum):
    GRAYSCALE = "grayscale"
    BONE = "bone"

    @property
    def label(self):
        return self.name.capitalize()

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown transfer preset {value!r}, expected one of: {names}") from None


def inverse_lerp(a, b, value):
    """Position of value between a and b (0 at a, 1 at b), unclamped."""
    value = np.asarray(value, dtype=np.float64)
    if a == b:
        return np.zeros_like(value)
    return (value - a) / (b - a)


def apply_transfer(density, preset=TransferPreset.GRAYSCALE):
    """
    Maps density in [0, 1] to an 8-bit display intensity.
    Scalars give an int, arrays give a uint8 array of the same shape.
    """
    preset = TransferPreset.parse(preset)
    d = np.clip(np.asarray(density, dtype=np.float64), 0.0, 1.0)

    if preset is TransferPreset.GRAYSCALE:
        level = d
    else:
        low, high = BONE_WINDOW
        level = np.clip(inverse_lerp(low, high, d), 0.0, 1.0)

    # Round half up
    intensity = np.floor(level * 255.0 + 0.5).astype(np.uint8)
    if intensity.ndim == 0:
        return int(intensity)
    return intensity
