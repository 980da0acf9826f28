"""LLM service for OpenAI integration."""

import logging
import json
import re
import hashlib
from collections import Counter
from itertools import combinations
from textwrap import dedent
from typing import Dict, List, Any, Optional

from tenacity import retry, stop_after_attempt, wait_exponential
import openai
from diskcache import Cache

from ..core.config import settings
from ..core.categories import AnalysisCategory, get_category, category_hint
from ..core.constants import PromptConstants, CacheConstants, ErrorConstants
from ..core.models import (
    AnalysisResult,
    CategoryInsight,
    Segment,
    SentimentDistribution,
)

logger = logging.getLogger(__name__)


class AnalysisError(RuntimeError):
    """The model could not produce a usable analysis."""


ANALYSIS_SYSTEM_PROMPT = dedent("""
You are a world-class AI system for market research and product review analysis.
Return ONLY JSON (no prose, no markdown, no code fences).
""").strip()

ANALYSIS_PROMPT = dedent("""
Perform a deep analysis of the following product reviews for a product in the "{label}" category.
{hint}

Analysis Steps:
1. Read and Understand: read all provided reviews thoroughly.
2. Per-Review Analysis: for each review, determine its primary sentiment (Positive, Neutral, or Negative)
   and the main categories it discusses. A single review can belong to multiple categories.
3. Aggregate Sentiments: calculate the percentage of reviews that are Positive, Neutral and Negative.
   The total must be 100.
4. Discover Key Categories: identify the top {min_categories} to {max_categories} most frequently discussed
   categories. Do not repeat categories. For each one give a short name, a summary of what customers say,
   the number of reviews mentioning it, and its positive and negative counts.
5. Analyze Category Intersections (for a Venn diagram): take the top 2 or 3 categories from step 4 and
   count the reviews in every segment of their Venn diagram. A segment is an EXACT combination:
   for categories A and B report A ONLY, B ONLY, and A AND B. Give each segment once.
6. Overall Summary: write a concise, neutral, executive-level summary (2-3 sentences max).

JSON schema:
{{
  "overallSummary": str,
  "sentimentDistribution": {{"positivePercentage": float, "neutralPercentage": float, "negativePercentage": float}},
  "categoryInsights": [{{"categoryName": str, "summary": str, "reviewCount": int, "positiveCount": int, "negativeCount": int}}],
  "categoryIntersections": [{{"categories": [str], "reviewCount": int, "positiveCount": int, "negativeCount": int}}]
}}

The reviews are:
---
{reviews}
---
""").strip()

REQUIRED_KEYS = ("sentimentDistribution", "categoryInsights", "categoryIntersections")


def _strip_code_fences(s: str) -> str:
    s = s.strip()
    return re.sub(r"^```(?:json)?|```$", "", s, flags=re.IGNORECASE|re.MULTILINE).strip()


def _safe_json(s: str) -> dict:
    """Parse a JSON object from a model response, tolerating fences and trailing commas."""
    cleaned = _strip_code_fences(s or "")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    # remove trailing commas before } or ]
    cleaned = re.sub(r',\s*([}\]])', r'\1', cleaned)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    # last-ditch: find first {...} block
    m = re.search(r"\{.*\}", cleaned, re.S)
    if m:
        try:
            return json.loads(m.group(0))
        except json.JSONDecodeError:
            pass
    raise AnalysisError("The AI model returned an invalid format. Please try again.")


def parse_analysis(data: Dict[str, Any]) -> AnalysisResult:
    """Validate raw model JSON and convert it to an AnalysisResult.

    Malformed segments are dropped with a warning; missing top-level
    structures are an error.
    """
    if not isinstance(data, dict) or any(data.get(k) is None for k in REQUIRED_KEYS):
        raise AnalysisError("The AI model returned an incomplete data structure.")

    segments = []
    for raw in data.get("categoryIntersections") or []:
        try:
            segments.append(Segment.from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping invalid category intersection {raw!r}: {e}")

    try:
        result = AnalysisResult.from_dict({**data, "categoryIntersections": []})
    except (KeyError, TypeError, ValueError) as e:
        raise AnalysisError(f"The AI model returned an incomplete data structure: {e}") from e
    result.category_intersections = segments

    total = round(result.sentiment_distribution.total)
    if total < PromptConstants.PERCENTAGE_SUM_MIN or total > PromptConstants.PERCENTAGE_SUM_MAX:
        # Rounding drift from the model, not worth failing the run
        logger.warning(f"Sentiment percentages sum to {total}.")

    return result


class LLMServiceFactory:
    """Factory for creating LLM services."""

    @staticmethod
    def create():
        """Create appropriate LLM service."""
        if settings.effective_openai_key:
            return OpenAIService()
        else:
            return FallbackLLMService()


class OpenAIService:
    """OpenAI-based review analysis."""

    def __init__(self):
        self.client = openai.OpenAI(api_key=settings.effective_openai_key)
        self.model = settings.openai_model
        self.cache = Cache(settings.cache_dir)  # Cache for API responses
        logger.info(f"OpenAI service initialized with caching (model={self.model})")

    @retry(
        stop=stop_after_attempt(settings.max_retries),
        wait=wait_exponential(multiplier=settings.retry_delay, max=settings.retry_backoff * 10),
        reraise=True,
    )
    def _complete(self, system: str, user: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user}
            ],
            response_format={"type": "json_object"},
            max_tokens=PromptConstants.ANALYSIS_MAX_TOKENS,
            temperature=PromptConstants.ANALYSIS_TEMPERATURE,
            timeout=ErrorConstants.REQUEST_TIMEOUT,
        )
        return (response.choices[0].message.content or "").strip()

    def chat(self, system: str, user: str) -> str:
        """Chat completion with on-disk caching."""
        cache_key = hashlib.md5(
            f"{self.model}|{system}|{user}|{PromptConstants.ANALYSIS_PROMPT_VERSION}".encode()
        ).hexdigest()

        cached_response = self.cache.get(cache_key)
        if cached_response:
            logger.debug(f"Cache hit for LLM request: {cache_key[:CacheConstants.CACHE_KEY_LENGTH]}...")
            return cached_response

        try:
            result = self._complete(system, user)
        except openai.OpenAIError as e:
            logger.error(f"Chat failed after {settings.max_retries} attempts: {e}")
            raise AnalysisError(
                "Failed to analyze reviews. Please check your API key and network connection."
            ) from e

        self.cache.set(cache_key, result, expire=3600*CacheConstants.CACHE_TTL_HOURS)
        logger.debug(f"Cached LLM response: {cache_key[:CacheConstants.CACHE_KEY_LENGTH]}...")
        return result

    def build_prompt(self, reviews_text: str, category: AnalysisCategory) -> str:
        return ANALYSIS_PROMPT.format(
            label=category.label,
            hint=category_hint(category),
            min_categories=PromptConstants.MIN_DISCOVERED_CATEGORIES,
            max_categories=PromptConstants.MAX_DISCOVERED_CATEGORIES,
            reviews=reviews_text,
        )

    def analyze_reviews(self, reviews_text: str, category_value: Optional[str] = None) -> AnalysisResult:
        """Send the reviews to the model and return the structured analysis."""
        category = get_category(category_value)
        logger.info(f"Analyzing {len(reviews_text)} chars of reviews as '{category.label}'")

        content = self.chat(ANALYSIS_SYSTEM_PROMPT, self.build_prompt(reviews_text, category))
        return parse_analysis(_safe_json(content))


class FallbackLLMService:
    """Fallback analysis using simple keyword rules."""

    POSITIVE_WORDS = ("good", "great", "excellent", "amazing", "love", "perfect", "best", "happy", "recommend")
    NEGATIVE_WORDS = ("bad", "terrible", "awful", "hate", "worst", "disappointing", "poor", "broken", "refund")

    def __init__(self):
        logger.info("Using fallback LLM service")

    def _sentiment(self, text: str) -> str:
        text_lower = text.lower()
        pos_count = sum(1 for word in self.POSITIVE_WORDS if re.search(rf"\b{word}\b", text_lower))
        neg_count = sum(1 for word in self.NEGATIVE_WORDS if re.search(rf"\b{word}\b", text_lower))
        if pos_count > neg_count:
            return "POSITIVE"
        elif neg_count > pos_count:
            return "NEGATIVE"
        return "NEUTRAL"

    def _aspects(self, text: str, category: AnalysisCategory) -> List[str]:
        text_lower = text.lower()
        return [
            a.name for a in category.aspects
            if any(re.search(rf"\b{re.escape(k)}\b", text_lower) for k in a.keywords)
        ]

    def analyze_reviews(self, reviews_text: str, category_value: Optional[str] = None) -> AnalysisResult:
        """Keyword-based analysis, one review per non-blank line."""
        logger.warning("Fallback LLM service used - no actual LLM available")
        category = get_category(category_value)
        reviews = [line.strip() for line in reviews_text.splitlines() if line.strip()]
        if not reviews:
            raise AnalysisError("No reviews to analyze.")

        labelled = [(self._sentiment(r), self._aspects(r, category)) for r in reviews]
        total = len(labelled)
        labels = Counter(label for label, _ in labelled)

        mentions = Counter(name for _, names in labelled for name in names)
        # Declaration order breaks ties so results are stable
        order = {a.name: i for i, a in enumerate(category.aspects)}
        top = sorted(mentions, key=lambda n: (-mentions[n], order[n]))

        insights = []
        for name in top[:PromptConstants.MAX_DISCOVERED_CATEGORIES]:
            hits = [label for label, names in labelled if name in names]
            insights.append(CategoryInsight(
                category_name=name,
                summary=f"{len(hits)} of {total} reviews mention {name.lower()}.",
                review_count=len(hits),
                positive_count=hits.count("POSITIVE"),
                negative_count=hits.count("NEGATIVE"),
            ))

        venn_names = top[:3]
        segments = []
        for size in range(1, len(venn_names) + 1):
            for combo in combinations(venn_names, size):
                exact = [
                    label for label, names in labelled
                    if set(combo) == set(names) & set(venn_names)
                ]
                segments.append(Segment(
                    categories=combo,
                    review_count=len(exact),
                    positive_count=exact.count("POSITIVE"),
                    negative_count=exact.count("NEGATIVE"),
                ))

        def pct(n: int) -> float:
            return round(100.0 * n / total, 1)

        summary = (
            f"Keyword analysis of {total} reviews for {category.label}: "
            f"{labels['POSITIVE']} positive, {labels['NEUTRAL']} neutral, {labels['NEGATIVE']} negative."
        )
        if top:
            summary += f" Most discussed: {', '.join(top[:3])}."

        return AnalysisResult(
            overall_summary=summary,
            sentiment_distribution=SentimentDistribution(
                positive_percentage=pct(labels["POSITIVE"]),
                neutral_percentage=pct(labels["NEUTRAL"]),
                negative_percentage=pct(labels["NEGATIVE"]),
            ),
            category_insights=insights,
            category_intersections=segments,
        )
