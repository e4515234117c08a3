"""
1) Load people and relationships from a GEDCOM file or a JSON export.
2) Optionally trim the data to the neighbourhood of the root person.
3) Lay out the pedigree chart (or a fan chart) around the root.
4) Plot the layout and optionally export it as DOT.
"""

import argparse
import logging
from pathlib import Path

from .fan import build_fan_chart_layout
from .graph import build_graph, get_ego_subgraph, graph_to_records
from .layout import build_pedigree_layout
from .parsing import load_records
from .plotting import plot_fan_chart, plot_pedigree, to_dot

NODE_WIDTH = 180
NODE_HEIGHT = 80
HORIZONTAL_GAP = 100


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lay out and draw a pedigree chart.")
    parser.add_argument("input", type=Path, help="GEDCOM (.ged) or JSON (.json) file.")
    parser.add_argument("--root", required=True, help="Id of the person to center the chart on.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("pedigree.svg"),
        help="Output image (svg, png or pdf; default: pedigree.svg).",
    )
    parser.add_argument(
        "--radius",
        type=int,
        default=None,
        help="Only keep people within this many relationships of the root.",
    )
    parser.add_argument("--dot", type=Path, default=None, help="Also write a DOT file.")
    parser.add_argument("--fan", action="store_true", help="Draw a fan chart instead.")
    parser.add_argument("--node-width", type=float, default=NODE_WIDTH)
    parser.add_argument("--node-height", type=float, default=NODE_HEIGHT)
    parser.add_argument("--horizontal-gap", type=float, default=HORIZONTAL_GAP)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print(f"Loading: {args.input}")
    people, relationships = load_records(args.input)
    print(f"  Found {len(people)} people and {len(relationships)} relationships")

    if args.radius is not None:
        print(f"Trimming to {args.radius} relationships around {args.root}...")
        G = build_graph(people, relationships)
        people, relationships = graph_to_records(get_ego_subgraph(G, args.root, args.radius))
        print(f"  Kept {len(people)} people and {len(relationships)} relationships")

    if args.fan:
        print("Building fan chart layout...")
        fan_layout = build_fan_chart_layout(people, relationships, args.root)
        print(f"  {len(fan_layout.nodes)} segments, depth {fan_layout.max_depth}")
        print(f"Plotting fan chart to: {args.output}")
        plot_fan_chart(fan_layout, args.output)
        print("Done!")
        return 0

    print("Building pedigree layout...")
    result = build_pedigree_layout(
        people,
        relationships,
        args.root,
        node_width=args.node_width,
        node_height=args.node_height,
        horizontal_gap=args.horizontal_gap,
    )
    if result.is_empty:
        print(f"  Nothing to draw: person {args.root} not found")
        return 1
    print(f"  {len(result.nodes)} people, {len(result.links)} links, {len(result.families)} families")

    print(f"Plotting pedigree to: {args.output}")
    plot_pedigree(result, args.node_width, args.node_height, args.root, args.output)

    if args.dot:
        to_dot(result, args.node_width, args.node_height).write_raw(str(args.dot))
        print(f"DOT saved to {args.dot}")

    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
