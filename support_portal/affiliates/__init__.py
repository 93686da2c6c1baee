"""Affiliate links and KB-driven affiliate recommendations."""

from .recommend import RankedAffiliate, RuleScore, recommend, score_rule
from .registry import AffiliateLink, AffiliateStatus, get_affiliate_link_by_key, get_affiliate_links
from .rules import (
    AFFILIATE_SUPPORT_MAPPINGS,
    AffiliateMatchRule,
    AffiliateSupportMapping,
    get_affiliate_support_doc_slugs,
    get_affiliate_support_mappings,
)

__all__ = [
    "AFFILIATE_SUPPORT_MAPPINGS",
    "AffiliateLink",
    "AffiliateMatchRule",
    "AffiliateStatus",
    "AffiliateSupportMapping",
    "RankedAffiliate",
    "RuleScore",
    "get_affiliate_link_by_key",
    "get_affiliate_links",
    "get_affiliate_support_doc_slugs",
    "get_affiliate_support_mappings",
    "recommend",
]
