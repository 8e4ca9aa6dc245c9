import argparse
from pathlib import Path

from simulator.image import save_png
from simulator.raster import trace_to_image
from simulator.turing_machine import TuringMachine

# === Main Driver ===
def export_trace_image(encoded, output_dir="images", width=900, height=1000, origin_x=0.5,
                       show_head_move=False, initial_tape="0", fit=None):
    machine = TuringMachine.from_b64(encoded)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    suffix = "_moves" if show_head_move else ""
    image_file = output_dir / f"{encoded}{suffix}.png"

    buffer = trace_to_image(machine, initial_tape, width, height, origin_x, show_head_move)
    save_png(buffer, image_file, size=fit)

    print(f"[INFO] Trace image saved to {image_file}")
    return image_file

# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Render a machine's space-time diagram to PNG")
    parser.add_argument("--machine", required=True, help="Encoded machine, e.g. mAQACAQEC...")
    parser.add_argument("--output_dir", default="images", help="Directory for the PNG")
    parser.add_argument("--width", type=int, default=900, help="Image width (tape cells)")
    parser.add_argument("--height", type=int, default=1000, help="Image height (steps)")
    parser.add_argument("--origin_x", type=float, default=0.5, help="Column of position 0 as a fraction of width")
    parser.add_argument("--initial_tape", default="0", help="Initial tape bits")
    parser.add_argument("--head_moves", action="store_true", help="Colour the head by move direction")
    parser.add_argument("--fit", type=int, nargs=2, metavar=("W", "H"), help="Stretch output to W x H pixels")
    args = parser.parse_args()

    export_trace_image(args.machine, args.output_dir, args.width, args.height, args.origin_x,
                       args.head_moves, args.initial_tape, args.fit)

if __name__ == "__main__":
    main()
