# Analysis package: extraction, rule-based scoring and the single-URL pipeline.

from .analyzer import SeoAnalyzer
from .extractor import extract_features
from .fetcher import PageFetcher
from .scoring import evaluate, issue_severity
from .types import AnalysisResult, PageFeatures, Recommendation

__all__ = [
    "SeoAnalyzer",
    "PageFetcher",
    "extract_features",
    "evaluate",
    "issue_severity",
    "AnalysisResult",
    "PageFeatures",
    "Recommendation",
]
