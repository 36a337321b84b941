import numpy as np

from volslice.sampling import Plane, clamp_index, extract_slice, max_index, slice_shape
from volslice.transfer import TransferPreset, apply_transfer


class PixelBuffer:
    """RGBA8 backing store, reallocated only when the requested size changes."""

    def __init__(self):
        self.pixels = None

    @property
    def width(self):
        return 0 if self.pixels is None else self.pixels.shape[1]

    @property
    def height(self):
        return 0 if self.pixels is None else self.pixels.shape[0]

    def ensure_size(self, width, height):
        if self.pixels is not None and self.pixels.shape[:2] == (height, width):
            return False
        self.release()
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)
        return True

    def fill_gray(self, intensity):
        self.pixels[..., :3] = intensity[..., np.newaxis]
        self.pixels[..., 3] = 255

    def release(self):
        self.pixels = None


def render_slice(volume, plane, slice_index, preset=TransferPreset.GRAYSCALE, buffer=None):
    """
    Renders one plane to a grayscale RGBA8 buffer of shape (out_height, out_width, 4).
    Pass a PixelBuffer to reuse its storage across calls.
    """
    plane = Plane.parse(plane)
    if buffer is None:
        buffer = PixelBuffer()

    out_w, out_h = slice_shape(volume.shape, plane)
    buffer.ensure_size(out_w, out_h)
    buffer.fill_gray(apply_transfer(extract_slice(volume, plane, slice_index), preset))
    return buffer.pixels


class SliceRenderer:
    def __init__(self, volume):
        self.volume = volume
        self.buffer = PixelBuffer()
        self.plane = Plane.AXIAL
        self.index = 0
        self.preset = TransferPreset.GRAYSCALE

    def render(self, plane, slice_index, preset=TransferPreset.GRAYSCALE):
        self.plane = Plane.parse(plane)
        self.preset = TransferPreset.parse(preset)
        self.index = clamp_index(self.volume.shape, self.plane, slice_index)
        return render_slice(self.volume, self.plane, self.index, self.preset, buffer=self.buffer)

    def status_text(self):
        top = max_index(self.volume.shape, self.plane)
        return f"{self.plane.label} Slice: {self.index} / {top}  |  Preset: {self.preset.label}"


def _fraction(index, extent):
    if extent <= 1:
        return 0.5
    return index / (extent - 1)


class TriPlanarSession:
    """
    Three orthogonal views sharing one volume. Each plane keeps its own slice
    index (x for sagittal, y for coronal, z for axial); one plane at a time is
    "active" and receives index changes from a single slider.
    """

    def __init__(self, volume, preset=TransferPreset.GRAYSCALE, active_plane=Plane.AXIAL):
        self.volume = volume
        self.preset = TransferPreset.parse(preset)
        self.active_plane = Plane.parse(active_plane)

        w, h, d = volume.shape
        # Start at center
        self.indices = {
            Plane.SAGITTAL: w // 2,
            Plane.CORONAL: h // 2,
            Plane.AXIAL: d // 2,
        }
        self.buffers = {plane: PixelBuffer() for plane in Plane}

    @property
    def x(self):
        return self.indices[Plane.SAGITTAL]

    @property
    def y(self):
        return self.indices[Plane.CORONAL]

    @property
    def z(self):
        return self.indices[Plane.AXIAL]

    def max_index(self, plane):
        return max_index(self.volume.shape, plane)

    def render(self, plane):
        plane = Plane.parse(plane)
        return render_slice(self.volume, plane, self.indices[plane], self.preset,
                            buffer=self.buffers[plane])

    def render_all(self):
        return {plane: self.render(plane) for plane in Plane}

    def set_index(self, plane, value):
        plane = Plane.parse(plane)
        self.indices[plane] = clamp_index(self.volume.shape, plane, value)
        # Other views show this index as a crosshair, so refresh them all
        return self.render_all()

    def set_preset(self, preset):
        self.preset = TransferPreset.parse(preset)
        return self.render_all()

    def set_active_plane(self, plane):
        self.active_plane = Plane.parse(plane)

    @property
    def active_index(self):
        return self.indices[self.active_plane]

    @property
    def active_max_index(self):
        return self.max_index(self.active_plane)

    def set_active_index(self, value):
        return self.set_index(self.active_plane, value)

    def crosshair(self, plane):
        """Normalized (u, v) position of the other two indices inside a plane's view."""
        w, h, d = self.volume.shape
        plane = Plane.parse(plane)
        if plane is Plane.AXIAL:
            return _fraction(self.x, w), _fraction(self.y, h)
        if plane is Plane.CORONAL:
            return _fraction(self.x, w), _fraction(self.z, d)
        return _fraction(self.y, h), _fraction(self.z, d)

    def status(self):
        return self.x, self.y, self.z, self.volume.shape, self.preset.label

    def status_text(self):
        w, h, d = self.volume.shape
        return (f"X(sag): {self.x}/{w-1}   Y(cor): {self.y}/{h-1}   Z(ax): {self.z}/{d-1}"
                f"   | Preset: {self.preset.label}")
