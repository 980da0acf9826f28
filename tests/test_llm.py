"""Tests for the LLM analysis services."""

import json
import pytest
import openai
from unittest.mock import Mock, patch

from reviewinsights.core.config import settings
from reviewinsights.core.venn import compute_diagram
from reviewinsights.core.models import DiagramState
from reviewinsights.services.llm import (
    AnalysisError,
    FallbackLLMService,
    LLMServiceFactory,
    OpenAIService,
    _safe_json,
    parse_analysis,
)


PAYLOAD = {
    "overallSummary": "Solid performance, pricey.",
    "sentimentDistribution": {"positivePercentage": 50, "neutralPercentage": 30, "negativePercentage": 20},
    "categoryInsights": [
        {"categoryName": "Performance", "summary": "Fast.", "reviewCount": 6, "positiveCount": 5, "negativeCount": 0},
        {"categoryName": "Value", "summary": "Expensive.", "reviewCount": 4, "positiveCount": 1, "negativeCount": 3},
    ],
    "categoryIntersections": [
        {"categories": ["Performance"], "reviewCount": 4, "positiveCount": 4, "negativeCount": 0},
        {"categories": ["Value"], "reviewCount": 2, "positiveCount": 0, "negativeCount": 2},
        {"categories": ["Performance", "Value"], "reviewCount": 2, "positiveCount": 1, "negativeCount": 1},
    ],
}


def _response(content):
    return Mock(choices=[Mock(message=Mock(content=content))])


class TestJsonParsing:
    """Lenient parsing of model output."""

    def test_plain_json(self):
        assert _safe_json('{"a": 1}') == {"a": 1}

    def test_code_fences(self):
        assert _safe_json('```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}

    def test_trailing_commas(self):
        assert _safe_json('{"a": [1, 2,],}') == {"a": [1, 2]}

    def test_prose_around_object(self):
        assert _safe_json('Here you go: {"a": 1} hope it helps') == {"a": 1}

    def test_garbage_raises(self):
        with pytest.raises(AnalysisError):
            _safe_json("not json at all")


class TestParseAnalysis:
    """Validation of the analysis structure."""

    def test_valid_payload(self):
        result = parse_analysis(PAYLOAD)
        assert len(result.category_intersections) == 3
        assert result.category_insights[1].category_name == "Value"

    @pytest.mark.parametrize("missing", ["sentimentDistribution", "categoryInsights", "categoryIntersections"])
    def test_missing_structure(self, missing):
        payload = {k: v for k, v in PAYLOAD.items() if k != missing}
        with pytest.raises(AnalysisError):
            parse_analysis(payload)

    def test_invalid_segments_are_skipped(self):
        payload = dict(PAYLOAD, categoryIntersections=PAYLOAD["categoryIntersections"] + [
            {"categories": [], "reviewCount": 1, "positiveCount": 0, "negativeCount": 0},
            {"categories": ["Value"], "reviewCount": 1, "positiveCount": 5, "negativeCount": 0},
            {"reviewCount": 1},
            "nonsense",
        ])
        result = parse_analysis(payload)
        assert len(result.category_intersections) == 3

    def test_percentage_drift_only_warns(self, caplog):
        payload = dict(PAYLOAD, sentimentDistribution={
            "positivePercentage": 50, "neutralPercentage": 30, "negativePercentage": 30,
        })
        result = parse_analysis(payload)
        assert result.sentiment_distribution.total == 110
        assert "sum to 110" in caplog.text


class TestLLMServiceFactory:
    """Service selection by configuration."""

    def test_fallback_without_key(self, monkeypatch):
        monkeypatch.setattr(settings, "openai_api_key", "")
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
        assert isinstance(LLMServiceFactory.create(), FallbackLLMService)

    def test_openai_with_key(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "openai_api_key", "sk-test")
        monkeypatch.setattr(settings, "cache_dir", str(tmp_path))
        with patch("reviewinsights.services.llm.openai.OpenAI"):
            assert isinstance(LLMServiceFactory.create(), OpenAIService)


class TestOpenAIService:
    """OpenAI-backed analysis with a mocked client."""

    def setup_method(self):
        self.patcher = patch("reviewinsights.services.llm.openai.OpenAI")
        self.client_cls = self.patcher.start()
        self.client = self.client_cls.return_value

    def teardown_method(self):
        self.patcher.stop()

    def _service(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "openai_api_key", "sk-test")
        monkeypatch.setattr(settings, "cache_dir", str(tmp_path))
        monkeypatch.setattr(OpenAIService._complete.retry, "sleep", lambda seconds: None)
        return OpenAIService()

    def test_analyze_reviews(self, monkeypatch, tmp_path):
        self.client.chat.completions.create.return_value = _response(json.dumps(PAYLOAD))
        service = self._service(monkeypatch, tmp_path)

        result = service.analyze_reviews("Fast but pricey\nGreat speed", "electronics")

        assert result.overall_summary == "Solid performance, pricey."
        kwargs = self.client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        prompt = kwargs["messages"][1]["content"]
        assert "Electronics" in prompt
        assert "Fast but pricey" in prompt

        diagram = compute_diagram(result.category_intersections)
        assert diagram.state is DiagramState.TWO_SET

    def test_responses_are_cached(self, monkeypatch, tmp_path):
        self.client.chat.completions.create.return_value = _response(json.dumps(PAYLOAD))
        service = self._service(monkeypatch, tmp_path)

        service.analyze_reviews("same reviews", "electronics")
        service.analyze_reviews("same reviews", "electronics")

        assert self.client.chat.completions.create.call_count == 1

    def test_transient_failure_is_retried(self, monkeypatch, tmp_path):
        self.client.chat.completions.create.side_effect = [
            openai.OpenAIError("temporary"),
            _response(json.dumps(PAYLOAD)),
        ]
        service = self._service(monkeypatch, tmp_path)

        result = service.analyze_reviews("reviews", "electronics")
        assert len(result.category_insights) == 2
        assert self.client.chat.completions.create.call_count == 2

    def test_persistent_failure_raises_analysis_error(self, monkeypatch, tmp_path):
        self.client.chat.completions.create.side_effect = openai.OpenAIError("down")
        service = self._service(monkeypatch, tmp_path)

        with pytest.raises(AnalysisError):
            service.analyze_reviews("reviews", "electronics")
        assert self.client.chat.completions.create.call_count == settings.max_retries

    def test_invalid_json_raises_analysis_error(self, monkeypatch, tmp_path):
        self.client.chat.completions.create.return_value = _response("I cannot help with that.")
        service = self._service(monkeypatch, tmp_path)

        with pytest.raises(AnalysisError):
            service.analyze_reviews("reviews", "electronics")


class TestFallbackLLMService:
    """Offline keyword analysis."""

    REVIEWS = "\n".join([
        "Great speed and the price is worth it",
        "Terrible support, asked for a refund",
        "Fast performance, love it",
        "The price is too expensive",
        "",
        "Setup was easy and intuitive",
    ])

    def test_analysis_shape(self):
        result = FallbackLLMService().analyze_reviews(self.REVIEWS, "electronics")
        dist = result.sentiment_distribution
        assert round(dist.total) == 100
        assert result.category_insights[0].category_name == "Performance"
        assert "5 reviews" in result.overall_summary

    def test_segments_are_exact_and_unique(self):
        result = FallbackLLMService().analyze_reviews(self.REVIEWS, "electronics")
        keys = [s.key for s in result.category_intersections]
        assert len(keys) == len(set(keys))

        diagram = compute_diagram(result.category_intersections)
        assert diagram.state is DiagramState.THREE_SET
        assert diagram.categories[:2] == ("Performance", "Value")

    def test_empty_text_raises(self):
        with pytest.raises(AnalysisError):
            FallbackLLMService().analyze_reviews("\n  \n", "electronics")

    def test_sentiment_matches_whole_words(self):
        service = FallbackLLMService()
        assert service._sentiment("Came with a badge and a bestowed warranty") == "NEUTRAL"
        assert service._sentiment("Best purchase, not bad at all, really good") == "POSITIVE"
        assert service._sentiment("Bad battery") == "NEGATIVE"
