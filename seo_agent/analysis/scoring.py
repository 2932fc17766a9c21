"""Rule-based SEO scoring.

Everything here is pure and deterministic: the same PageFeatures always give
the same score, issues and recommendations. Generated text is never consulted.

Fields are evaluated in a fixed order (title, description, headings, images,
links) so output is stable and diffable across runs. Penalties for the same
field are mutually exclusive.
"""

from __future__ import annotations

from typing import List, Tuple

from .types import (
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PageFeatures,
    Recommendation,
    ScoreCard,
)

TITLE_MIN, TITLE_MAX = 30, 60
DESCRIPTION_MIN, DESCRIPTION_MAX = 120, 160
HEADINGS_MIN = 3
IMAGES_MAX = 20
LINKS_MIN = 3

MISSING_FIELD_PENALTY = 20
LENGTH_PENALTY = 10
NO_HEADINGS_PENALTY = 15
FEW_HEADINGS_PENALTY = 5
IMAGES_PENALTY = 10
LINKS_PENALTY = 10

CRITICAL = "❌"
WARNING = "⚠️"
INFO = "ℹ️"

TITLE_RECOMMENDATION = Recommendation(
    "📝 Add a descriptive, keyword-rich title tag (50-60 characters)", PRIORITY_HIGH
)
DESCRIPTION_RECOMMENDATION = Recommendation(
    "📝 Create a compelling meta description (150-160 characters) with a call-to-action", PRIORITY_HIGH
)
HEADINGS_RECOMMENDATION = Recommendation(
    "🏗️ Implement proper heading structure (H1 for title, H2-H6 for sections)", PRIORITY_HIGH
)

UNIVERSAL_RECOMMENDATIONS: Tuple[Recommendation, ...] = (
    Recommendation("🖼️ Ensure all images have descriptive alt text for accessibility and SEO", PRIORITY_MEDIUM),
    Recommendation("⚡ Optimize page load speed - compress images, minify CSS/JS, use CDN", PRIORITY_MEDIUM),
    Recommendation("🔗 Add 3-5 internal links to relevant pages to improve site structure", PRIORITY_MEDIUM),
    Recommendation("📱 Verify mobile responsiveness - Google uses mobile-first indexing", PRIORITY_MEDIUM),
    Recommendation("🔒 Ensure HTTPS is properly configured across the entire site", PRIORITY_LOW),
    Recommendation("🗺️ Submit XML sitemap to Google Search Console for better indexing", PRIORITY_LOW),
    Recommendation("🧩 Add structured data (schema.org) markup and validate it with the Rich Results Test", PRIORITY_LOW),
)


# -------------------------
# Per-field deficiencies
# -------------------------
def _title_deficiency(f: PageFeatures) -> str | None:
    if not f.has_title:
        return "missing"
    if len(f.title) < TITLE_MIN:
        return "short"
    if len(f.title) > TITLE_MAX:
        return "long"
    return None


def _description_deficiency(f: PageFeatures) -> str | None:
    if not f.has_meta_description:
        return "missing"
    if len(f.meta_description) < DESCRIPTION_MIN:
        return "short"
    if len(f.meta_description) > DESCRIPTION_MAX:
        return "long"
    return None


def _headings_deficiency(f: PageFeatures) -> str | None:
    if not f.headings:
        return "missing"
    if len(f.headings) < HEADINGS_MIN:
        return "few"
    return None


# -------------------------
# Public API
# -------------------------
def calculate_score(features: PageFeatures) -> int:
    score = 100

    title = _title_deficiency(features)
    if title == "missing":
        score -= MISSING_FIELD_PENALTY
    elif title is not None:
        score -= LENGTH_PENALTY

    description = _description_deficiency(features)
    if description == "missing":
        score -= MISSING_FIELD_PENALTY
    elif description is not None:
        score -= LENGTH_PENALTY

    headings = _headings_deficiency(features)
    if headings == "missing":
        score -= NO_HEADINGS_PENALTY
    elif headings == "few":
        score -= FEW_HEADINGS_PENALTY

    # too many images slows the page down
    if len(features.images) > IMAGES_MAX:
        score -= IMAGES_PENALTY

    if len(features.links) < LINKS_MIN:
        score -= LINKS_PENALTY

    return max(0, min(100, score))


def find_issues(features: PageFeatures) -> List[str]:
    issues: List[str] = []

    title = _title_deficiency(features)
    n = len(features.title)
    if title == "missing":
        issues.append(f"{CRITICAL} Missing title tag - critical for SEO")
    elif title == "short":
        issues.append(f"{WARNING} Title tag is too short ({n} characters) - should be 50-60 characters")
    elif title == "long":
        issues.append(f"{WARNING} Title tag is too long ({n} characters) - may be truncated in search results")

    description = _description_deficiency(features)
    n = len(features.meta_description)
    if description == "missing":
        issues.append(f"{CRITICAL} Missing meta description - important for click-through rates")
    elif description == "short":
        issues.append(f"{WARNING} Meta description is too short ({n} characters) - should be 150-160 characters")
    elif description == "long":
        issues.append(f"{WARNING} Meta description is too long ({n} characters) - will be truncated")

    headings = _headings_deficiency(features)
    if headings == "missing":
        issues.append(f"{CRITICAL} No heading tags (H1-H6) found - critical for content structure")
    elif headings == "few":
        issues.append(f"{WARNING} Low number of headings - consider adding more subheadings for better structure")

    n = len(features.images)
    if n == 0:
        issues.append(f"{INFO} No images found - visual content can improve engagement")
    elif n > IMAGES_MAX:
        issues.append(f"{WARNING} High number of images ({n}) - ensure optimization to prevent slow load times")

    if len(features.links) < LINKS_MIN:
        issues.append(f"{WARNING} Low number of internal links - improve site structure with more linking")

    return issues


def generate_recommendations(features: PageFeatures) -> List[Recommendation]:
    """Conditional High-priority entries first, then the fixed universal list."""
    recs: List[Recommendation] = []
    if _title_deficiency(features) is not None:
        recs.append(TITLE_RECOMMENDATION)
    if _description_deficiency(features) is not None:
        recs.append(DESCRIPTION_RECOMMENDATION)
    if _headings_deficiency(features) is not None:
        recs.append(HEADINGS_RECOMMENDATION)
    recs.extend(UNIVERSAL_RECOMMENDATIONS)
    return recs


def evaluate(features: PageFeatures) -> ScoreCard:
    return ScoreCard(
        score=calculate_score(features),
        issues=find_issues(features),
        recommendations=generate_recommendations(features),
    )


def issue_severity(issue: str) -> str:
    """Classify an issue string by its prefix marker."""
    if issue.startswith(CRITICAL):
        return "critical"
    if issue.startswith(WARNING):
        return "warning"
    return "info"
