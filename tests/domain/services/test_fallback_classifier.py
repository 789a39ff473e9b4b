"""Tests for the keyword-graph fallback classifier."""

import pytest

from claim_verifier.domain.models.verification import VerdictLabel
from claim_verifier.domain.services.fallback_classifier import (
    TOPIC_KEYWORDS,
    FallbackClassifier,
    KeywordGraph,
)


@pytest.fixture
def classifier() -> FallbackClassifier:
    """Provide a classifier over the built-in vocabulary."""
    return FallbackClassifier()


def test_graph_topics_are_cliques():
    """Every keyword is connected to exactly the other keywords of its topic."""
    graph = KeywordGraph.from_registry()

    for topic, keywords in TOPIC_KEYWORDS:
        for keyword in keywords:
            node = graph.node(keyword)
            assert node.topic == topic
            assert node.neighbors == frozenset(keywords) - {keyword}

    assert len(graph) == sum(len(keywords) for _, keywords in TOPIC_KEYWORDS)


def test_graph_from_custom_registry():
    """Graph construction works on any registration table."""
    graph = KeywordGraph.from_registry([("x", ("a", "b")), ("y", ("c",))])

    assert graph.topics == ("x", "y")
    assert graph.node("a").neighbors == frozenset({"b"})
    assert graph.node("c").neighbors == frozenset()
    assert "d" not in graph


def test_sensational_claim_is_fake(classifier: FallbackClassifier):
    """Sensational wording outweighs a single scientific phrase."""
    analysis = classifier.analyze("Shocking new study shows miracle cure")

    assert analysis.topic_scores["sensational"] >= 1
    assert analysis.topic_scores["scientific"] >= 1
    assert analysis.fake_score > analysis.real_score

    verdict = classifier.classify("Shocking new study shows miracle cure")
    assert verdict.label == VerdictLabel.FAKE
    assert verdict.confidence == pytest.approx(0.35 + 0.15 * (analysis.fake_score - analysis.real_score))


def test_keyword_reached_by_several_seeds_counts_once(classifier: FallbackClassifier):
    """Each matched keyword contributes exactly one point."""
    analysis = classifier.analyze("shocking secret miracle")

    assert analysis.topic_scores["sensational"] == 3
    assert analysis.found_keywords == ["shocking", "miracle", "secret"]


def test_no_keywords_is_real_at_base_confidence(classifier: FallbackClassifier):
    """With no signals the tie resolves to real."""
    verdict = classifier.classify("test claim")

    assert verdict.label == VerdictLabel.REAL
    assert verdict.confidence == pytest.approx(0.35)
    assert "No strong indicators" in verdict.explanation
    assert len(verdict.sources) == 4


def test_tie_resolves_to_real(classifier: FallbackClassifier):
    """Equal fake and real scores are labelled real."""
    verdict = classifier.classify("Breaking: research on sleep")

    assert verdict.label == VerdictLabel.REAL
    assert verdict.confidence == pytest.approx(0.35)


def test_confidence_is_capped(classifier: FallbackClassifier):
    """Fallback confidence never exceeds 0.75."""
    verdict = classifier.classify(
        "BREAKING urgent alert: shocking, unbelievable secret miracle doctors hate"
    )

    assert verdict.label == VerdictLabel.FAKE
    assert verdict.confidence == pytest.approx(0.75)


def test_credible_language_is_real(classifier: FallbackClassifier):
    """Official and evidence language leans real."""
    verdict = classifier.classify(
        "According to official statistics, analysis shows unemployment fell"
    )

    assert verdict.label == VerdictLabel.REAL
    assert verdict.confidence > 0.35
    assert "credible reporting" in verdict.explanation
