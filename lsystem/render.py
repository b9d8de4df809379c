# lsystem/render.py
import argparse
from .core import render_mesh_to_image, export_image, render_from_csv, CANVAS_WIDTH_HEIGHT
from .presets import PRESETS, DEFAULT_PRESET
from .system import LSystem, DEFAULT_ITERATIONS


def _read_text(value: str) -> str:
    """Returns the contents of ``value`` if it names a file prefixed with '@', else the value itself."""
    if value.startswith("@"):
        with open(value[1:], "r", encoding="utf-8") as f:
            return f.read()
    return value.replace("\\n", "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render L-system plants as triangulated branch meshes.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    # --- Parser for rendering a single system ---
    parser_single = subparsers.add_parser("single", help="Render a single L-system.")
    parser_single.add_argument("output", type=str, help="The path to save the output PNG image.")
    parser_single.add_argument("--preset", choices=sorted(PRESETS), default=DEFAULT_PRESET, help="Starting grammar.")
    parser_single.add_argument("--axiom", type=str, help="Override the preset axiom.")
    parser_single.add_argument("--rules", type=str, help="Rules text ('\\n' separates lines, '@file' reads a file).")
    parser_single.add_argument("--instructions", type=str, help="Instructions text ('\\n' separates lines, '@file' reads a file).")
    parser_single.add_argument("--iterations", type=str, default=str(DEFAULT_ITERATIONS), help="Number of rewriting passes.")
    parser_single.add_argument("--size", type=int, default=CANVAS_WIDTH_HEIGHT, help="Canvas size in pixels.")

    # --- Parser for rendering from a CSV file ---
    parser_csv = subparsers.add_parser("csv", help="Render all programs from a CSV file.")
    parser_csv.add_argument("name", type=str, help="Base name of the CSV in 'output/' (e.g., 'plants').")
    parser_csv.add_argument("--size", type=int, default=CANVAS_WIDTH_HEIGHT, help="Canvas size in pixels.")
    return parser


def main(argv=None):
    """Main execution function with command-line parsing."""
    args = build_parser().parse_args(argv)

    # --- Execute the chosen command ---
    if args.command == "single":
        system = LSystem.from_preset(args.preset, iterations_text=args.iterations)
        if args.axiom is not None:
            system.axiom = args.axiom
        if args.rules is not None:
            system.rules_text = _read_text(args.rules)
        if args.instructions is not None:
            system.instructions_text = _read_text(args.instructions)
        print(f"Rendering '{system.axiom}' with {len(system.rules)} rules, {system.iterations} iterations...")
        mesh = system.build()
        image_array = render_mesh_to_image(mesh, canvas_dim=args.size)
        export_image(image_array, args.output)
        print(f"✅ Saved {len(mesh.vertices)} vertices / {len(mesh.indices) // 3} triangles to {args.output}")

    elif args.command == "csv":
        print(f"Rendering CSV '{args.name}.csv'...")
        render_from_csv(args.name, canvas_dim=args.size)

if __name__ == "__main__":
    main()
