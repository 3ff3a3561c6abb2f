from __future__ import annotations
import logging
import os
import sys
from markup import parse_svg_file
from svg_parser import InvalidSVGError, SVGParser

def process_svg_file(svg_path: str, verbose: bool = False, width: float = None,
                     height: float = None, ignore_view_box: bool = False,
                     ignore_root_clip: bool = False, show_tree: bool = False) -> bool:
    if not os.path.exists(svg_path):
        print(f"Error: File not found: {svg_path}")
        return False

    if not svg_path.lower().endswith('.svg'):
        print(f"Warning: {svg_path} does not have .svg extension")

    try:
        document = parse_svg_file(svg_path)
        result = SVGParser().parse(document, width=width, height=height,
                                   ignore_view_box=ignore_view_box,
                                   ignore_root_clip=ignore_root_clip)
    except InvalidSVGError as e:
        print(f"Error: {svg_path}: {e}")
        return False
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {svg_path}: {e}")
        return False

    if verbose:
        print(f"\nProcessing: {svg_path}")
        # warnings already went through logging
        result.print_report(show_warnings=False)

    if show_tree:
        result.root.print_tree()

    node_count = sum(1 for _ in result.root.traverse())
    print(f"[OK] {svg_path}: {node_count} scene node(s)")
    return True

def main(argv: list[str] = None):
    args = sys.argv[1:] if argv is None else argv

    if len(args) == 0:
        print("SVG to scene graph converter")
        print("Usage: svg-scene <svg_file1> [svg_file2] ... [options]")
        print("\nOptions:")
        print("  -v, --verbose         Print viewport and viewBox information")
        print("  -t, --tree            Print the resulting scene tree")
        print("  -w, --width WIDTH     Fallback viewport width")
        print("  -h, --height HEIGHT   Fallback viewport height")
        print("  --ignore-viewbox      Do not wrap the tree in the viewBox transform group")
        print("  --ignore-root-clip    Do not clip the root group to the viewport")
        print("\nExamples:")
        print("  svg-scene test.svg --tree")
        print("  svg-scene *.svg -v")
        print("  svg-scene icon.svg -w 64 -h 64")
        return 0

    verbose = False
    show_tree = False
    width = None
    height = None
    ignore_view_box = False
    ignore_root_clip = False
    svg_files = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ['-v', '--verbose']:
            verbose = True
        elif arg in ['-t', '--tree']:
            show_tree = True
        elif arg in ['-w', '--width', '-h', '--height']:
            if i + 1 >= len(args):
                print(f"Error: {arg} requires a value")
                return 2
            try:
                value = float(args[i + 1])
            except ValueError:
                print(f"Error: {arg} must be a number")
                return 2
            if value <= 0:
                print(f"Error: {arg} must be positive")
                return 2
            if arg in ['-w', '--width']:
                width = value
            else:
                height = value
            i += 1
        elif arg == '--ignore-viewbox':
            ignore_view_box = True
        elif arg == '--ignore-root-clip':
            ignore_root_clip = True
        elif arg.startswith('-'):
            print(f"Unknown option: {arg}")
            return 2
        else:
            svg_files.append(arg)
        i += 1

    if len(svg_files) == 0:
        print("Error: No SVG files specified")
        return 2

    logging.basicConfig(level=logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    success_count = 0
    for svg_file in svg_files:
        if process_svg_file(svg_file, verbose, width, height, ignore_view_box,
                            ignore_root_clip, show_tree):
            success_count += 1

    print(f"\nProcessed {success_count}/{len(svg_files)} file(s) successfully")
    return 0 if success_count == len(svg_files) else 1

if __name__ == "__main__":
    sys.exit(main())
