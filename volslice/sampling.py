from enum import Enum

import numpy as np


class Plane(Enum):
    """Orthogonal cut through the volume, named after the fixed axis."""
    AXIAL = "axial"        # fixes Z, shows X-Y
    CORONAL = "coronal"    # fixes Y, shows X-Z
    SAGITTAL = "sagittal"  # fixes X, shows Y-Z

    @property
    def label(self):
        return self.name.capitalize()

    @property
    def axis(self):
        return FIXED_AXIS[self]

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown plane {value!r}, expected one of: {names}") from None


FIXED_AXIS = {
    Plane.SAGITTAL: 0,
    Plane.CORONAL: 1,
    Plane.AXIAL: 2,
}


def max_index(shape, plane):
    return shape[Plane.parse(plane).axis] - 1


def clamp_index(shape, plane, index):
    # Scrubbing past either end must never fail
    return int(max(0, min(int(index), max_index(shape, plane))))


def slice_shape(shape, plane):
    """
    Output grid size (out_width, out_height) of a plane.
    Output X is the lower free volume axis, output Y the higher one.
    """
    w, h, d = shape
    plane = Plane.parse(plane)
    if plane is Plane.AXIAL:
        return w, h
    if plane is Plane.CORONAL:
        return w, d
    return h, d


def voxel_for(plane, slice_index, out_x, out_y):
    """Volume coordinate (x, y, z) of an output cell."""
    plane = Plane.parse(plane)
    if plane is Plane.AXIAL:
        return out_x, out_y, slice_index
    if plane is Plane.CORONAL:
        return out_x, slice_index, out_y
    return slice_index, out_x, out_y


def sample(volume, plane, slice_index, out_x, out_y):
    """
    Nearest-voxel density at output cell (out_x, out_y) of the given plane.
    The slice index is clamped; output coordinates must lie inside the grid.
    """
    plane = Plane.parse(plane)
    out_w, out_h = slice_shape(volume.shape, plane)
    if not (0 <= out_x < out_w and 0 <= out_y < out_h):
        raise IndexError(f"Output cell ({out_x}, {out_y}) outside {plane.label} grid {out_w}x{out_h}")

    index = clamp_index(volume.shape, plane, slice_index)
    return float(volume[voxel_for(plane, index, out_x, out_y)])


def extract_slice(volume, plane, slice_index):
    """
    Full density grid of a plane, shape (out_height, out_width), so that
    grid[out_y, out_x] == sample(volume, plane, slice_index, out_x, out_y).
    """
    plane = Plane.parse(plane)
    index = clamp_index(volume.shape, plane, slice_index)

    if plane is Plane.AXIAL:
        grid = volume[:, :, index]
    elif plane is Plane.CORONAL:
        grid = volume[:, index, :]
    else:
        grid = volume[index, :, :]
    # Rows are output Y
    return np.ascontiguousarray(grid.T)
