# Data models for the analysis layer.
# Frozen: a re-analysis builds a new AnalysisResult, nothing is updated in place.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

NO_TITLE = "No title found"
NO_META_DESCRIPTION = "No meta description"

PRIORITY_HIGH = "High"
PRIORITY_MEDIUM = "Medium"
PRIORITY_LOW = "Low"


@dataclass(frozen=True)
class PageFeatures:
    """Structural signals pulled out of a single HTML page."""
    title: str = NO_TITLE
    meta_description: str = NO_META_DESCRIPTION
    headings: Tuple[str, ...] = ()
    images: Tuple[str, ...] = ()
    links: Tuple[str, ...] = ()

    @property
    def has_title(self) -> bool:
        return bool(self.title) and self.title != NO_TITLE

    @property
    def has_meta_description(self) -> bool:
        return bool(self.meta_description) and self.meta_description != NO_META_DESCRIPTION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "meta_description": self.meta_description,
            "headings": list(self.headings),
            "images": list(self.images),
            "links": list(self.links),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageFeatures":
        return cls(
            title=data.get("title", NO_TITLE),
            meta_description=data.get("meta_description", NO_META_DESCRIPTION),
            headings=tuple(data.get("headings") or ()),
            images=tuple(data.get("images") or ()),
            links=tuple(data.get("links") or ()),
        )


@dataclass(frozen=True)
class Recommendation:
    text: str
    priority: str

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "priority": self.priority}


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis: features, rule-based score, and retrieved context."""
    url: str
    page_features: PageFeatures
    score: int
    issues: Tuple[str, ...] = ()
    recommendations: Tuple[Recommendation, ...] = ()
    retrieved_context: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "page_features": self.page_features.to_dict(),
            "score": self.score,
            "issues": list(self.issues),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "retrieved_context": self.retrieved_context,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        return cls(
            url=data["url"],
            page_features=PageFeatures.from_dict(data.get("page_features") or {}),
            score=int(data["score"]),
            issues=tuple(data.get("issues") or ()),
            recommendations=tuple(
                Recommendation(text=r["text"], priority=r["priority"])
                for r in data.get("recommendations") or ()
            ),
            retrieved_context=data.get("retrieved_context", ""),
        )


@dataclass
class ScoreCard:
    """Return value of the scoring engine."""
    score: int
    issues: List[str] = field(default_factory=list)
    recommendations: List[Recommendation] = field(default_factory=list)
