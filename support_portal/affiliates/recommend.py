from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from support_portal.reference.kb import KBArticle

from .registry import AffiliateLink, AffiliateStatus, get_affiliate_link_by_key
from .rules import AFFILIATE_SUPPORT_MAPPINGS, AffiliateMatchRule, AffiliateSupportMapping

logger = logging.getLogger(__name__)

SLUG_WEIGHT = 120
PRODUCT_FAMILY_WEIGHT = 50
CATEGORY_WEIGHT = 40
TAG_WEIGHT = 12
MAX_RECOMMENDATIONS = 3


@dataclass(slots=True, frozen=True)
class RuleScore:
    score: int
    rationale: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class RankedAffiliate:
    """Affiliate recommended for an article together with the evidence."""

    affiliate: AffiliateLink
    support_doc_slug: str
    score: int
    rationale: tuple[str, ...]


def score_rule(article: KBArticle, rule: AffiliateMatchRule) -> RuleScore:
    """Score ``article`` against ``rule`` without the mapping's priority weight."""

    score = 0
    rationale: list[str] = []

    if article.slug in rule.slugs:
        score += SLUG_WEIGHT
        rationale.append("Exact article mapping")
    if article.product_family in rule.product_families:
        score += PRODUCT_FAMILY_WEIGHT
        rationale.append(f"Product family match: {article.product_family}")
    if article.category in rule.categories:
        score += CATEGORY_WEIGHT
        rationale.append(f"Category match: {article.category}")

    article_tags = {tag.lower() for tag in article.tags}
    matched_tags = [tag for tag in rule.tags if tag.lower() in article_tags]
    if matched_tags:
        score += TAG_WEIGHT * len(matched_tags)
        rationale.append(f"Tag match: {', '.join(matched_tags)}")

    return RuleScore(score=score, rationale=tuple(rationale))


def recommend(
    article: KBArticle,
    *,
    mappings: Sequence[AffiliateSupportMapping] = AFFILIATE_SUPPORT_MAPPINGS,
    link_lookup: Callable[[str], AffiliateLink | None] = get_affiliate_link_by_key,
    limit: int = MAX_RECOMMENDATIONS,
) -> list[RankedAffiliate]:
    """Return up to ``limit`` affiliates relevant to ``article``, best first.

    A mapping only qualifies when at least one of its conditions matched; the
    priority weight is added afterwards and never qualifies a rule alone.
    Ties on score are broken by label, case-insensitively.
    """

    if limit < 1:
        raise ValueError("limit must be positive")

    ranked: list[RankedAffiliate] = []
    for mapping in mappings:
        affiliate = link_lookup(mapping.affiliate_key)
        if affiliate is None:
            logger.debug("Skipping mapping for unknown affiliate %s", mapping.affiliate_key)
            continue
        if affiliate.status is AffiliateStatus.PAUSED:
            continue

        result = score_rule(article, mapping.rule)
        if result.score <= 0:
            continue

        ranked.append(
            RankedAffiliate(
                affiliate=affiliate,
                support_doc_slug=mapping.support_doc_slug,
                score=result.score + mapping.priority,
                rationale=result.rationale,
            )
        )

    ranked.sort(key=lambda item: (-item.score, item.affiliate.label.casefold()))
    return ranked[: min(limit, MAX_RECOMMENDATIONS)]
