"""Tests for drawing, DOT export and the command line."""
from __future__ import annotations

import json

import matplotlib.pyplot as plt

from conftest import HORIZONTAL_GAP, NODE_HEIGHT, NODE_WIDTH
from pedigree_layout import build_fan_chart_layout, build_pedigree_layout
from pedigree_layout.main import main
from pedigree_layout.plotting import plot_fan_chart, plot_pedigree, to_dot


def layout(people, relationships, root):
    return build_pedigree_layout(
        people,
        relationships,
        root,
        node_width=NODE_WIDTH,
        node_height=NODE_HEIGHT,
        horizontal_gap=HORIZONTAL_GAP,
    )


class TestPlotting:
    """Tests for the matplotlib renderers."""

    def test_plot_pedigree_svg(self, tmp_path, family_scenario):
        result = layout(*family_scenario, "r")
        output = tmp_path / "chart.svg"

        plot_pedigree(result, NODE_WIDTH, NODE_HEIGHT, "r", output)

        assert output.exists()
        assert "<svg" in output.read_text(encoding="utf-8")
        plt.close("all")

    def test_plot_fan_chart_png(self, tmp_path, family_scenario):
        people, relationships = family_scenario
        output = tmp_path / "fan.png"

        plot_fan_chart(build_fan_chart_layout(people, relationships, "r"), output)

        assert output.stat().st_size > 0
        plt.close("all")


class TestDotExport:
    """Tests for to_dot."""

    def test_edges_match_links(self, family_scenario):
        result = layout(*family_scenario, "r")
        P = to_dot(result, NODE_WIDTH, NODE_HEIGHT)

        assert len(P.get_edges()) == len(result.links)
        source = P.to_string()
        assert "Root" in source
        assert "dashed" in source


class TestMain:
    """Tests for the command line entry point."""

    def _write_tree(self, tmp_path):
        path = tmp_path / "tree.json"
        path.write_text(
            json.dumps(
                {
                    "people": [
                        {"_id": "dad", "givenNames": "Dan", "surnames": "Doe"},
                        {"_id": "kid", "givenNames": "Kit", "surnames": "Doe", "isLiving": True},
                        {"_id": "gk", "givenNames": "Gil", "surnames": "Doe", "isLiving": True},
                    ],
                    "relationships": [
                        {"_id": "r1", "type": "parent_child", "personId1": "dad", "personId2": "kid"},
                        {"_id": "r2", "type": "parent_child", "personId1": "kid", "personId2": "gk"},
                    ],
                }
            ),
            encoding="utf-8",
        )
        return path

    def test_writes_chart_and_dot(self, tmp_path):
        tree = self._write_tree(tmp_path)
        svg = tmp_path / "out.svg"
        dot = tmp_path / "out.dot"

        assert main([str(tree), "--root", "kid", "-o", str(svg), "--dot", str(dot), "--radius", "1"]) == 0
        assert svg.exists()
        assert "Kit Doe" in dot.read_text(encoding="utf-8")
        plt.close("all")

    def test_fan_chart(self, tmp_path):
        tree = self._write_tree(tmp_path)
        out = tmp_path / "fan.svg"

        assert main([str(tree), "--root", "dad", "--fan", "-o", str(out)]) == 0
        assert out.exists()
        plt.close("all")

    def test_missing_root(self, tmp_path, capsys):
        tree = self._write_tree(tmp_path)

        assert main([str(tree), "--root", "nobody", "-o", str(tmp_path / "x.svg")]) == 1
        assert "Nothing to draw" in capsys.readouterr().out

    def test_root_only_in_relationships(self, tmp_path, capsys):
        tree = tmp_path / "tree.json"
        tree.write_text(
            json.dumps(
                {
                    "people": [{"_id": "kid", "givenNames": "Kit", "surnames": "Doe"}],
                    "relationships": [
                        {"_id": "r1", "type": "parent_child", "personId1": "gone", "personId2": "kid"},
                    ],
                }
            ),
            encoding="utf-8",
        )
        out = tmp_path / "x.svg"

        assert main([str(tree), "--root", "gone", "-o", str(out)]) == 1
        assert "Nothing to draw" in capsys.readouterr().out
        assert not out.exists()
