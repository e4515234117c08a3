"""Drawing pedigree and fan layouts with matplotlib, and DOT export with pydot."""

import logging
import math
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import FancyBboxPatch, Wedge
import pydot

from .fan import ANCESTOR, FanChartLayout, polar_to_cartesian, segment_radii
from .models import LayoutResult, LinkType

logger = logging.getLogger(__name__)

ACCENT = "#c0392b"
BORDER = "darkgray"
LIVING_FILL = "lightblue"
DECEASED_FILL = "lightgray"
ROOT_FILL = "lightpink"


def _save_or_show(fig, output_path: Path | None) -> None:
    if output_path:
        output_path = Path(output_path)
        ext = output_path.suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf"):
            ext = "png"
        fig.savefig(output_path, format=ext, dpi=100)
        logger.debug("Chart saved to %s", output_path)
        plt.close(fig)
    else:
        plt.show()


def plot_pedigree(
    result: LayoutResult,
    node_width: float,
    node_height: float,
    root_person_id: str | None = None,
    output_path: Path | None = None,
):
    """
    Draw a pedigree layout: one card per node, family trunks through their
    gutters and direct spouse lines. Highlighted links use the accent colour.

    Args:
        result: Output of build_pedigree_layout
        node_width: Card width used for the layout
        node_height: Card height used for the layout
        root_person_id: Person whose card is filled with the root colour
        output_path: File to write (png, svg or pdf). If None, displays interactively.

    Returns:
        The matplotlib figure
    """
    width = max(result.width, 1)
    height = max(result.height, 1)
    fig, ax = plt.subplots(figsize=(width / 100, height / 100))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # y grows downward, as in SVG
    ax.set_aspect("equal")
    ax.axis("off")

    for route in result.routes:
        color = ACCENT if route.is_highlighted else BORDER
        linewidth = 3 if route.is_highlighted else 2
        for path in route.parent_paths + route.child_paths:
            xs, ys = zip(*path)
            ax.plot(xs, ys, color=color, linewidth=linewidth, solid_joinstyle="miter")

    for link in result.links:
        if link.type is not LinkType.SPOUSE:
            continue
        x1 = link.from_node.x + node_width / 2
        x2 = link.to_node.x + node_width / 2
        y1 = link.from_node.y + node_height / 2
        y2 = link.to_node.y + node_height / 2
        ax.plot(
            [x1, x2],
            [y1, y2],
            color=ACCENT if link.is_highlighted else BORDER,
            linewidth=3 if link.is_highlighted else 2,
            linestyle="--",
            zorder=1,
        )

    for node in result.nodes:
        if node.id == root_person_id:
            fillcolor = ROOT_FILL
        elif node.person.is_living:
            fillcolor = LIVING_FILL
        else:
            fillcolor = DECEASED_FILL

        ax.add_patch(
            FancyBboxPatch(
                (node.x, node.y),
                node_width,
                node_height,
                boxstyle="round,pad=0,rounding_size=8",
                facecolor=fillcolor,
                edgecolor=BORDER,
                zorder=2,
            )
        )
        ax.text(
            node.x + node_width / 2,
            node.y + node_height / 2,
            node.person.display_name,
            ha="center",
            va="center",
            fontsize=8,
            zorder=3,
        )

    _save_or_show(fig, output_path)
    return fig


def plot_fan_chart(layout: FanChartLayout, output_path: Path | None = None):
    """Draw a fan layout as concentric ring segments around the root."""
    radius = layout.root_radius + layout.max_depth * layout.ring_width
    size = 2 * radius + 40
    fig, ax = plt.subplots(figsize=(size / 100, size / 100))
    ax.set_xlim(-size / 2, size / 2)
    ax.set_ylim(size / 2, -size / 2)
    ax.set_aspect("equal")
    ax.axis("off")

    ax.add_patch(Wedge((0, 0), layout.root_radius, 0, 360, facecolor=ROOT_FILL, edgecolor=BORDER))
    ax.text(0, 0, layout.root_person.display_name, ha="center", va="center", fontsize=7)

    for node in layout.nodes:
        inner, outer = segment_radii(layout, node.depth)
        ax.add_patch(
            Wedge(
                (0, 0),
                outer,
                math.degrees(node.angle_start),
                math.degrees(node.angle_end),
                width=outer - inner,
                facecolor=LIVING_FILL if node.side == ANCESTOR else DECEASED_FILL,
                edgecolor="white",
            )
        )
        mid_angle = (node.angle_start + node.angle_end) / 2
        x, y = polar_to_cartesian(0, 0, (inner + outer) / 2, mid_angle)
        ax.text(x, y, node.person.display_name, ha="center", va="center", fontsize=6)

    _save_or_show(fig, output_path)
    return fig


def to_dot(result: LayoutResult, node_width: float, node_height: float) -> pydot.Dot:
    """
    Export a pedigree layout as a DOT graph with pinned positions.

    Positions are in points with y flipped, suitable for `neato -n`.
    """
    P = pydot.Dot(graph_type="graph")
    P.set("splines", "ortho")
    P.set_node_defaults(shape="box", style="rounded,filled", fontsize="10", fixedsize="true")

    for node in result.nodes:
        cx = node.x + node_width / 2
        cy = result.height - (node.y + node_height / 2)
        P.add_node(
            pydot.Node(
                node.id,
                label=node.person.display_name,
                pos=f"{cx:g},{cy:g}!",
                width=f"{node_width / 72:.3f}",
                height=f"{node_height / 72:.3f}",
                fillcolor=LIVING_FILL if node.person.is_living else DECEASED_FILL,
            )
        )

    for link in result.links:
        attrs = {"color": ACCENT if link.is_highlighted else BORDER}
        if link.type is LinkType.SPOUSE:
            attrs["style"] = "dashed"
        P.add_edge(pydot.Edge(link.from_node.id, link.to_node.id, **attrs))

    return P
