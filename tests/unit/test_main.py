"""Unit tests for the command-line entry point."""

import json
from unittest.mock import patch

import pytest

from feed_aggregator.core.fetcher import FeedFetcher
from feed_aggregator.core.pipeline import AggregationPipeline
from feed_aggregator.main import build_arg_parser, main


def offline_pipeline():
    feeds = {
        "https://a.example/feed": [
            {"title": "A1", "link": "https://a.example/1", "isoDate": "2024-01-02T00:00:00Z"},
            {"title": "A2", "link": "https://a.example/2", "isoDate": "2024-01-01T00:00:00Z"},
        ],
        "https://b.example/feed": RuntimeError("boom"),
    }

    def parse(url, timeout_seconds):
        outcome = feeds[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return AggregationPipeline(fetcher=FeedFetcher(parse_feed=parse))


@pytest.fixture
def registry(tmp_path):
    path = tmp_path / "feeds.json"
    path.write_text(
        json.dumps(
            {
                "sources": [
                    {"url": "https://a.example/feed", "name": "A"},
                    {"url": "https://b.example/feed", "name": "B"},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


class TestMain:
    """Tests for main."""

    @patch("feed_aggregator.main.create_pipeline", side_effect=offline_pipeline)
    def test_success(self, mock_create, registry, tmp_path, capsys):
        """Test a run with one failing source still writes the page."""
        output = tmp_path / "dist" / "index.html"

        status = main(["--sources", str(registry), "--output", str(output)])

        assert status == 0
        assert output.exists()
        assert f"Wrote 2 items to {output}" in capsys.readouterr().out

    @patch("feed_aggregator.main.create_pipeline", side_effect=offline_pipeline)
    def test_config_error(self, mock_create, tmp_path, capsys):
        """Test that a bad registry exits with status 1 and writes nothing."""
        output = tmp_path / "dist" / "index.html"

        status = main(["--sources", str(tmp_path / "missing.json"), "--output", str(output)])

        assert status == 1
        assert not output.exists()
        assert "Wrote" not in capsys.readouterr().out

    def test_missing_config_file(self, tmp_path):
        """Test an unknown --config path."""
        assert main(["--config", str(tmp_path / "nope.yaml")]) == 1

    @pytest.mark.parametrize(
        "content",
        [
            "fetcher: [unclosed\n",
            "fetcher:\n  timeout_seconds: -1\n",
            "logging:\n  level: LOUD\n",
        ],
    )
    def test_invalid_config_file(self, content, tmp_path, capsys):
        """Test that unparseable or invalid configuration exits cleanly."""
        path = tmp_path / "config.yaml"
        path.write_text(content, encoding="utf-8")

        status = main(["--config", str(path)])

        assert status == 1
        assert capsys.readouterr().err.startswith("Error: ")


class TestArgParser:
    """Tests for build_arg_parser."""

    def test_options(self):
        """Test recognised options."""
        args = build_arg_parser().parse_args(
            ["--sources", "f.json", "--output", "o.html", "--log-level", "DEBUG"]
        )

        assert args.sources == "f.json"
        assert args.output == "o.html"
        assert args.log_level == "DEBUG"
        assert args.config is None
