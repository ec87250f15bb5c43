"""Integration tests for the penpath command line."""

import json
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from penpath import __version__
from penpath.cli.app import app
from penpath.io import load_path
from penpath.utils import configure_logging

runner = CliRunner()

LINE_DOC = {
    "id": "line",
    "x": 0,
    "y": 0,
    "w": 10,
    "h": 1,
    "points": [{"x": 0, "y": 0}, {"x": 10, "y": 0}],
}

DRAW_SCRIPT = [
    {"type": "pointer_down", "x": 0, "y": 0, "time_ms": 0},
    {"type": "pointer_up", "x": 0, "y": 0, "time_ms": 0},
    {"type": "pointer_down", "x": 100, "y": 0, "time_ms": 1000},
    {"type": "pointer_up", "x": 100, "y": 0, "time_ms": 1000},
    {"type": "key", "key": "Enter", "time_ms": 1500},
]


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the handlers each invocation installs on the root logger."""
    yield
    configure_logging(quiet=True, write_file=False)
    structlog.reset_defaults()


def write_json(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestGlobalOptions:
    """Tests for options shared by every command."""

    def test_version(self) -> None:
        """Test --version prints the version and exits."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_invalid_log_level(self, tmp_path: Path) -> None:
        """Test an unknown log level is refused."""
        doc = write_json(tmp_path / "line.json", LINE_DOC)
        result = runner.invoke(app, ["--log-level", "LOUD", "render", str(doc)])
        assert result.exit_code == 1
        assert "Invalid log level" in result.output


class TestRender:
    """Tests for the render command."""

    def test_render(self, tmp_path: Path) -> None:
        """Test path data and bounds are printed."""
        doc = write_json(tmp_path / "line.json", LINE_DOC)
        result = runner.invoke(app, ["render", str(doc)])
        assert result.exit_code == 0
        assert "M 0 0 L 10 0" in result.output
        assert "2 points" in result.output

    def test_render_quiet(self, tmp_path: Path) -> None:
        """Test quiet mode prints only the path data."""
        doc = write_json(tmp_path / "line.json", LINE_DOC)
        result = runner.invoke(app, ["-q", "render", str(doc)])
        assert result.exit_code == 0
        assert result.output.strip() == "M 0 0 L 10 0"

    def test_render_svg(self, tmp_path: Path) -> None:
        """Test an SVG preview is written on request."""
        doc = write_json(tmp_path / "line.json", LINE_DOC)
        svg = tmp_path / "line.svg"
        result = runner.invoke(app, ["render", str(doc), "--svg", str(svg), "--stroke", "blue"])
        assert result.exit_code == 0
        content = svg.read_text(encoding="utf-8")
        assert 'd="M 0 0 L 10 0"' in content
        assert 'stroke="blue"' in content

    def test_render_counts_closing_segment(self, tmp_path: Path) -> None:
        """Test the summary counts the closing segment of a closed path."""
        square = {
            **LINE_DOC,
            "id": "square",
            "is_closed": True,
            "points": [{"x": 0, "y": 0}, {"x": 10, "y": 0}, {"x": 10, "y": 10}, {"x": 0, "y": 10}],
        }
        doc = write_json(tmp_path / "square.json", square)
        result = runner.invoke(app, ["render", str(doc)])
        assert result.exit_code == 0
        assert "4 segments" in result.output
        assert "closed" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing document exits with an error."""
        result = runner.invoke(app, ["render", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Could not load document" in result.output

    def test_not_a_path_document(self, tmp_path: Path) -> None:
        """Test a JSON file without points exits with an error."""
        doc = write_json(tmp_path / "bad.json", {"shapes": []})
        result = runner.invoke(app, ["render", str(doc)])
        assert result.exit_code == 1
        assert "Invalid path document" in result.output


class TestFlatten:
    """Tests for the flatten command."""

    def test_flatten(self, tmp_path: Path) -> None:
        """Test the polygon is printed with its vertex count."""
        doc = write_json(tmp_path / "line.json", LINE_DOC)
        result = runner.invoke(app, ["flatten", str(doc)])
        assert result.exit_code == 0
        assert "3 vertices" in result.output

    def test_min_samples(self, tmp_path: Path) -> None:
        """Test the minimum interval count is honoured."""
        doc = write_json(tmp_path / "line.json", LINE_DOC)
        result = runner.invoke(app, ["flatten", str(doc), "-n", "5", "-l", "100"])
        assert result.exit_code == 0
        assert "6 vertices" in result.output


class TestReplay:
    """Tests for the replay command."""

    def test_replay_drawing(self, tmp_path: Path) -> None:
        """Test a drawing session is replayed and saved."""
        script = write_json(tmp_path / "draw.json", DRAW_SCRIPT)
        output = tmp_path / "result.json"
        svg = tmp_path / "result.svg"
        result = runner.invoke(app, ["replay", str(script), "-o", str(output), "--svg", str(svg)])

        assert result.exit_code == 0
        assert "M 0 0 L 100 0" in result.output
        assert "1 completed" in result.output
        path = load_path(output)
        assert path.id == "shape:1"
        assert len(path.points) == 2
        assert not path.edit_mode
        assert svg.exists()

    def test_replay_editing(self, tmp_path: Path) -> None:
        """Test shape and edit steps drive an editing session."""
        square = {
            "id": "square",
            "w": 100,
            "h": 100,
            "is_closed": True,
            "points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}, {"x": 100, "y": 100}, {"x": 0, "y": 100}],
        }
        steps = {
            "steps": [
                {"type": "shape", "path": square},
                {"type": "edit", "shape": "square"},
                {"type": "pointer_down", "x": 100, "y": 100, "time_ms": 0},
                {"type": "pointer_up", "x": 100, "y": 100, "time_ms": 0},
                {"type": "key", "key": "Delete", "time_ms": 500},
                {"type": "key", "key": "Escape", "time_ms": 600},
            ]
        }
        script = write_json(tmp_path / "edit.json", steps)
        output = tmp_path / "result.json"
        result = runner.invoke(app, ["replay", str(script), "-o", str(output)])

        assert result.exit_code == 0
        assert "1 deleted" in result.output
        path = load_path(output)
        assert path.id == "square"
        assert len(path.points) == 3
        assert path.is_closed

    def test_replay_cancelled(self, tmp_path: Path) -> None:
        """Test a cancelled drawing leaves nothing to print."""
        script = write_json(
            tmp_path / "cancel.json",
            [
                {"type": "pointer_down", "x": 0, "y": 0},
                {"type": "key", "key": "Escape"},
            ],
        )
        result = runner.invoke(app, ["replay", str(script)])
        assert result.exit_code == 0
        assert "No shape left after replay" in result.output

    def test_replay_effects(self, tmp_path: Path) -> None:
        """Test --effects lists the effects of the session in order."""
        script = write_json(tmp_path / "draw.json", DRAW_SCRIPT)
        result = runner.invoke(app, ["-q", "replay", str(script), "--effects"])

        assert result.exit_code == 0
        lines = [line.split()[1] for line in result.output.splitlines() if "{" in line]
        assert lines[0] == "cursor_changed"
        assert lines.index("tool_changed") < lines.index("reselect_scheduled")
        assert lines[-1] == "shapes_selected"
        assert '"delay_ms":10' in result.output
        assert "M 0 0 L 100 0" in result.output

    def test_invalid_number(self, tmp_path: Path) -> None:
        """Test a non-numeric zoom exits with an error instead of a traceback."""
        script = write_json(tmp_path / "bad.json", [{"type": "pointer_down", "x": 1, "y": 2, "zoom": "big"}])
        result = runner.invoke(app, ["replay", str(script)])
        assert result.exit_code == 1
        assert "Invalid event script" in result.output
        assert "zoom" in result.output

    def test_invalid_script(self, tmp_path: Path) -> None:
        """Test an invalid step exits with an error."""
        script = write_json(tmp_path / "bad.json", [{"type": "teleport"}])
        result = runner.invoke(app, ["replay", str(script)])
        assert result.exit_code == 1
        assert "Invalid event script" in result.output
