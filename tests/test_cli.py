"""Tests for the command-line interface."""

import json
import pytest

from reviewinsights import cli
from reviewinsights.core.config import settings
from reviewinsights.core.models import Segment, AnalysisResult, SentimentDistribution


@pytest.fixture
def offline(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "")
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")


class TestCli:
    """End-to-end CLI runs with the offline analysis."""

    def test_analyze_writes_outputs(self, offline, tmp_path, capsys):
        reviews = tmp_path / "reviews.csv"
        reviews.write_text(
            "Great speed and the price is worth it\n"
            "Fast performance, love it\n"
            "The price is too expensive\n",
            encoding="utf-8",
        )
        out = tmp_path / "out.json"
        svg = tmp_path / "venn.svg"

        cli.main(["analyze", str(reviews), "--category", "electronics", "--out", str(out), "--svg", str(svg)])

        printed = capsys.readouterr().out
        assert "Performance & Value" in printed
        assert svg.read_text(encoding="utf-8").startswith("<svg")
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["category"]["value"] == "electronics"
        assert data["diagram"]["state"] == "two_set"

    def test_venn_from_saved_analysis(self, tmp_path, capsys):
        result = AnalysisResult(
            overall_summary="",
            sentiment_distribution=SentimentDistribution(100, 0, 0),
            category_intersections=[
                Segment(("A",), 3, 3, 0), Segment(("B",), 1, 1, 0), Segment(("C",), 2, 2, 0),
                Segment(("D",), 5, 5, 0),
            ],
        )
        path = tmp_path / "analysis.json"
        path.write_text(json.dumps(result.to_dict()), encoding="utf-8")
        svg = tmp_path / "venn.svg"

        cli.main(["venn", str(path), "--svg", str(svg), "--scale", "2"])

        printed = capsys.readouterr().out
        assert "not drawn: D" in printed
        assert 'viewBox="0 0 900 720"' in svg.read_text(encoding="utf-8")

    def test_unsupported_file_exits_nonzero(self, offline, tmp_path):
        bad = tmp_path / "reviews.txt"
        bad.write_text("hello", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["analyze", str(bad)])
        assert excinfo.value.code == 1

    def test_categories_listing(self, capsys):
        cli.main(["categories"])
        printed = capsys.readouterr().out
        assert "electronics" in printed
        assert "Business Intelligence" in printed

    def test_no_command_prints_help(self, capsys):
        cli.main([])
        assert "usage" in capsys.readouterr().out.lower()

    def test_venn_skips_invalid_raw_segments(self, tmp_path, capsys):
        raw = {
            "overallSummary": "",
            "sentimentDistribution": {"positivePercentage": 100, "neutralPercentage": 0, "negativePercentage": 0},
            "categoryInsights": [],
            "categoryIntersections": [
                {"categories": ["A"], "reviewCount": 3, "positiveCount": 3, "negativeCount": 0},
                {"categories": ["B"], "reviewCount": 1, "positiveCount": 5, "negativeCount": 0},
                {"categories": ["C"], "reviewCount": 2, "positiveCount": 2, "negativeCount": 0},
            ],
        }
        path = tmp_path / "raw.json"
        path.write_text(json.dumps(raw), encoding="utf-8")

        cli.main(["venn", str(path)])

        printed = capsys.readouterr().out
        assert "Category overlap (A, C)" in printed
        assert "B" not in printed

    def test_venn_incomplete_analysis_exits_nonzero(self, tmp_path):
        path = tmp_path / "raw.json"
        path.write_text(json.dumps({"overallSummary": "only a summary"}), encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["venn", str(path)])
        assert excinfo.value.code == 1

    def test_corrupt_workbook_exits_nonzero(self, offline, tmp_path):
        bad = tmp_path / "reviews.xlsx"
        bad.write_bytes(b"this is not a zip archive")
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["analyze", str(bad)])
        assert excinfo.value.code == 1
