from dataclasses import dataclass

import numpy as np

# --- Generation defaults ---
DEFAULT_SEED = 1234

BODY_WEIGHT = 0.55
NOISE_SCALE = 0.12
SHELL_GAIN = 0.35


@dataclass(frozen=True)
class Blob:
    """Additive bright sphere. Center and radius are in normalized [-1, 1] units."""
    center: tuple
    radius: float
    intensity: float


@dataclass(frozen=True)
class Shell:
    """Additive band between two normalized radial distances from the volume center."""
    inner: float
    outer: float
    intensity: float


DEFAULT_BLOBS = (
    Blob(center=(0.10, 0.05, 0.00), radius=0.25, intensity=0.7),
    Blob(center=(-0.15, -0.10, 0.10), radius=0.20, intensity=0.9),
)
# Bone ring near the edge of the body
DEFAULT_SHELL = Shell(inner=0.65, outer=0.78, intensity=0.9)


def _check_shape(shape):
    if len(shape) != 3:
        raise ValueError(f"Volume needs 3 dimensions, got {len(shape)}")
    for name, size in zip("whd", shape):
        if int(size) != size or size <= 0:
            raise ValueError(f"Volume dimension {name}={size} must be a positive integer")


def normalized_axes(shape):
    """
    Normalized coordinates n = (i - size/2) / (size/2) for each axis.
    Returns sparse (X, Y, Z) grids that broadcast to the full volume shape.
    """
    axes = []
    for size in shape:
        half = size * 0.5
        axes.append((np.arange(size, dtype=np.float64) - half) / half)
    return np.meshgrid(*axes, indexing='ij', sparse=True)


def radial_distance(shape):
    xx, yy, zz = normalized_axes(shape)
    return np.sqrt(xx**2 + yy**2 + zz**2)


def voxel_offset(shape, x, y, z):
    """Flat offset of voxel (x, y, z) in a volume stored x-fastest."""
    w, h, _ = shape
    return x + y * w + z * w * h


def add_blob(volume, blob):
    if blob.radius <= 0:
        raise ValueError(f"Blob radius must be positive, got {blob.radius}")
    cx, cy, cz = blob.center
    xx, yy, zz = normalized_axes(volume.shape)

    dist = np.sqrt((xx - cx)**2 + (yy - cy)**2 + (zz - cz)**2)
    t = np.clip(1.0 - dist / blob.radius, 0.0, 1.0)
    np.clip(volume + t * t * blob.intensity, 0.0, 1.0, out=volume)
    return volume


def add_shell(volume, shell):
    if shell.inner > shell.outer:
        raise ValueError(f"Shell inner radius {shell.inner} exceeds outer radius {shell.outer}")
    r = radial_distance(volume.shape)
    band = (r > shell.inner) & (r < shell.outer)
    np.clip(volume + band * (shell.intensity * SHELL_GAIN), 0.0, 1.0, out=volume)
    return volume


def create_synthetic_volume(width, height, depth, seed=DEFAULT_SEED,
                            blobs=DEFAULT_BLOBS, shell=DEFAULT_SHELL):
    """
    Creates a deterministic 3D density phantom: a soft body sphere with fine
    noise, plus bright blobs and an optional bone shell.
    Shape: (X, Y, Z), values in [0, 1], read-only.
    """
    shape = (width, height, depth)
    _check_shape(shape)

    # One draw per voxel, z-major then y then x
    rng = np.random.default_rng(seed)
    noise = rng.random((depth, height, width)).T * NOISE_SCALE

    body = np.clip(1.0 - radial_distance(shape), 0.0, 1.0)
    volume = np.asfortranarray(np.clip(body * BODY_WEIGHT + noise, 0.0, 1.0), dtype=np.float32)

    for blob in blobs:
        add_blob(volume, blob)
    if shell is not None:
        add_shell(volume, shell)

    volume.flags.writeable = False
    return volume
