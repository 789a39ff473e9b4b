"""Keyword-graph classifier used when no evidence source is available."""

import logging
from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Set, Tuple

from ..models.verification import Verdict, VerdictLabel, default_sources

logger = logging.getLogger(__name__)

# Topic -> keywords. Keywords are matched as lowercase substrings.
TOPIC_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("sensational", ("shocking", "unbelievable", "mind-blowing", "miracle", "secret")),
    ("clickbait", ("you won't believe", "this one trick", "doctors hate", "number 7 will shock you")),
    ("urgency", ("breaking", "urgent", "immediate", "now", "alert")),
    ("scientific", ("study shows", "research", "peer-reviewed", "published in", "data")),
    ("official", ("according to", "reported", "official", "confirmed", "experts say")),
    ("evidence", ("statistics", "analysis shows", "evidence suggests", "findings indicate")),
)

FAKE_TOPICS = ("sensational", "clickbait", "urgency")
REAL_TOPICS = ("scientific", "official", "evidence")

MAX_CONFIDENCE = 0.75
BASE_CONFIDENCE = 0.35
CONFIDENCE_STEP = 0.15


@dataclass(frozen=True)
class KeywordNode:
    """A keyword, its topic and its same-topic neighbours."""

    keyword: str
    topic: str
    neighbors: FrozenSet[str]


class KeywordGraph:
    """Immutable keyword graph in which each topic forms a clique."""

    def __init__(self, nodes: Mapping[str, KeywordNode], topics: Sequence[str]):
        self._nodes = MappingProxyType(dict(nodes))
        self.topics: Tuple[str, ...] = tuple(topics)

    @classmethod
    def from_registry(
        cls, registry: Sequence[Tuple[str, Sequence[str]]] = TOPIC_KEYWORDS
    ) -> "KeywordGraph":
        """Build the graph from a topic registration table.

        Two keywords are connected iff they are registered under the same
        topic. A keyword registered twice keeps its first topic.
        """
        nodes: Dict[str, KeywordNode] = {}
        for topic, keywords in registry:
            for keyword in keywords:
                if keyword in nodes:
                    continue
                neighbors = frozenset(k for k in keywords if k != keyword)
                nodes[keyword] = KeywordNode(keyword=keyword, topic=topic, neighbors=neighbors)
        return cls(nodes, [topic for topic, _ in registry])

    def node(self, keyword: str) -> Optional[KeywordNode]:
        """Get the node for a keyword."""
        return self._nodes.get(keyword)

    def keywords(self) -> List[str]:
        """All keywords in registration order."""
        return list(self._nodes)

    def __contains__(self, keyword: str) -> bool:
        return keyword in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)


@dataclass
class KeywordAnalysis:
    """Topic scores and matched keywords for one piece of text."""

    topic_scores: Dict[str, int]
    found_keywords: List[str] = field(default_factory=list)

    def score(self, topics: Sequence[str]) -> int:
        """Sum of the scores of the given topics."""
        return sum(self.topic_scores.get(topic, 0) for topic in topics)

    @property
    def fake_score(self) -> int:
        return self.score(FAKE_TOPICS)

    @property
    def real_score(self) -> int:
        return self.score(REAL_TOPICS)


class FallbackClassifier:
    """Weak classifier based on breadth-first traversal of the keyword graph."""

    def __init__(self, graph: Optional[KeywordGraph] = None):
        self.graph = graph or KeywordGraph.from_registry()

    def analyze(self, text: str) -> KeywordAnalysis:
        """Score each topic by the keywords found in the text."""
        lowered = text.lower()
        analysis = KeywordAnalysis(topic_scores={topic: 0 for topic in self.graph.topics})
        visited: Set[str] = set()

        for keyword in self.graph.keywords():
            if keyword not in lowered:
                continue
            analysis.found_keywords.append(keyword)
            if keyword not in visited:
                self._traverse(keyword, lowered, visited, analysis.topic_scores)

        return analysis

    def _traverse(
        self, start: str, text: str, visited: Set[str], topic_scores: Dict[str, int]
    ) -> None:
        queue = deque([start])
        visited.add(start)

        while queue:
            node = self.graph.node(queue.popleft())
            if node is None or node.keyword not in text:
                continue
            topic_scores[node.topic] += 1
            for neighbor in node.neighbors:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

    def classify(self, claim: str) -> Verdict:
        """Produce a low-confidence verdict from keyword signals alone.

        Ties between fake and real signals resolve to ``real``.
        """
        analysis = self.analyze(claim)
        fake_score, real_score = analysis.fake_score, analysis.real_score

        label = VerdictLabel.FAKE if fake_score > real_score else VerdictLabel.REAL
        confidence = min(MAX_CONFIDENCE, BASE_CONFIDENCE + CONFIDENCE_STEP * abs(fake_score - real_score))

        logger.info(
            f"🕸️ Keyword analysis: fake={fake_score}, real={real_score}, "
            f"label={label.value}, confidence={confidence:.2f}"
        )

        return Verdict(
            label=label,
            confidence=confidence,
            explanation=self._explain(analysis),
            sources=default_sources(4),
        )

    @staticmethod
    def _explain(analysis: KeywordAnalysis) -> str:
        fake_score, real_score = analysis.fake_score, analysis.real_score
        parts = ["⚠️ Evidence sources unavailable - using keyword graph analysis."]

        if fake_score > 0 and real_score > 0:
            parts.append(
                f"Detected mixed signals: {fake_score} sensational indicator(s) "
                f"and {real_score} credible indicator(s)."
            )
        elif fake_score > 0:
            parts.append(
                f"Found {fake_score} sensational/clickbait pattern(s) suggesting potential misinformation."
            )
        elif real_score > 0:
            parts.append(
                f"Found {real_score} scientific/official language pattern(s) suggesting credible reporting."
            )
        else:
            parts.append("No strong indicators found in the keyword network.")

        if analysis.found_keywords:
            parts.append(f"Keywords detected: {', '.join(analysis.found_keywords[:3])}.")

        parts.append("This analysis has limited accuracy. Please verify with trusted fact-checking sources.")
        return " ".join(parts)
