import argparse
from volslice.core import create_synthetic_volume
from volslice.sampling import Plane
from volslice.transfer import TransferPreset
from volslice.vis import SliceViewer, TriPlanarViewer

VIEWER_SEED = 1024
VIEWER_SHAPE = (192, 192, 128)  # (W, H, D)

def main():
    width, height, depth = VIEWER_SHAPE
    parser = argparse.ArgumentParser(description="Synthetic volume slice viewer")
    parser.add_argument("--width", type=int, default=width)
    parser.add_argument("--height", type=int, default=height)
    parser.add_argument("--depth", type=int, default=depth)
    parser.add_argument("--seed", type=int, default=VIEWER_SEED)
    parser.add_argument("--plane", choices=[p.value for p in Plane], default=Plane.AXIAL.value,
                        help="Plane for the single-view viewer.")
    parser.add_argument("--preset", choices=[p.value for p in TransferPreset],
                        default=TransferPreset.GRAYSCALE.value)
    parser.add_argument("--triplanar", action="store_true", help="Show axial, coronal and sagittal views together.")
    args = parser.parse_args()

    print("Generating volume...")
    try:
        volume = create_synthetic_volume(args.width, args.height, args.depth, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))
    print(f"Volume shape: {volume.shape}")

    print("Starting viewer...")
    if args.triplanar:
        TriPlanarViewer(volume, preset=args.preset)
    else:
        SliceViewer(volume, plane=args.plane, preset=args.preset)

if __name__ == "__main__":
    main()
