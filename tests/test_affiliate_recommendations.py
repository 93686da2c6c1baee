from __future__ import annotations

from dataclasses import replace

import pytest

from support_portal.affiliates import (
    AFFILIATE_SUPPORT_MAPPINGS,
    AffiliateStatus,
    get_affiliate_link_by_key,
    get_affiliate_support_doc_slugs,
    recommend,
    score_rule,
)
from support_portal.affiliates.rules import AffiliateMatchRule, AffiliateSupportMapping
from support_portal.reference.kb import KB_ARTICLES, KBArticle


def _article(**overrides) -> KBArticle:
    values = dict(
        slug="adobe-acrobat-signing",
        title="Acrobat signing fails",
        category="Adobe",
        product_family="Adobe",
        product="Acrobat",
        tags=["Documentation"],
    )
    values.update(overrides)
    return KBArticle.create(**values)


def test_adobe_article_ranks_adobe_above_grammarly():
    results = recommend(_article())

    keys = [result.affiliate.key for result in results]
    assert keys == ["adobe-affiliate", "grammarly-affiliate"]
    adobe, grammarly = results
    assert adobe.score == 190
    assert adobe.rationale == ("Product family match: Adobe", "Category match: Adobe")
    assert adobe.support_doc_slug == "adobe-affiliate-partnerize-setup-and-attribution-validation"
    assert grammarly.score == 112
    assert grammarly.rationale == ("Category match: Adobe", "Tag match: documentation")


def test_tag_only_match_scores_twelve_per_tag():
    rule = AffiliateMatchRule(tags=("vpn", "privacy", "network"))
    result = score_rule(_article(category="Other", product_family="Other", tags=["VPN", "network"]), rule)

    assert result.score == 24
    assert result.rationale == ("Tag match: vpn, network",)


def test_exact_slug_mapping():
    rule = AffiliateMatchRule(slugs=frozenset({"adobe-acrobat-signing"}))

    assert score_rule(_article(), rule).rationale == ("Exact article mapping",)
    assert score_rule(_article(), rule).score == 120


@pytest.mark.parametrize("article", KB_ARTICLES, ids=lambda article: article.slug)
def test_results_are_capped_and_sorted(article):
    results = recommend(article)

    assert len(results) <= 3
    ordering = [(-result.score, result.affiliate.label.casefold()) for result in results]
    assert ordering == sorted(ordering)
    assert all(result.rationale for result in results)


def test_rule_without_matches_is_excluded_despite_priority():
    article = _article(category="Facilities", product_family="Other", tags=[])

    assert recommend(article) == []


def test_ties_are_broken_by_label():
    article = _article(category="Shared", product_family="Other", tags=[])
    mappings = [
        AffiliateSupportMapping("surfshark-affiliate", "doc-b", 10, AffiliateMatchRule(categories=frozenset({"Shared"}))),
        AffiliateSupportMapping("grammarly-affiliate", "doc-a", 10, AffiliateMatchRule(categories=frozenset({"Shared"}))),
    ]

    results = recommend(article, mappings=mappings)

    assert [result.affiliate.label for result in results] == ["Grammarly", "Surfshark VPN"]


def test_unknown_and_paused_affiliates_are_skipped():
    def lookup(key):
        link = get_affiliate_link_by_key(key)
        if key == "adobe-affiliate":
            return replace(link, status=AffiliateStatus.PAUSED)
        if key == "grammarly-affiliate":
            return None
        return link

    assert recommend(_article(), link_lookup=lookup) == []


def test_limit_is_respected():
    article = _article(category="Identity / MFA / SSO", product_family="Microsoft", tags=["security", "mfa"])

    assert len(recommend(article)) == 3
    assert len(recommend(article, limit=1)) == 1
    with pytest.raises(ValueError):
        recommend(article, limit=0)


def test_support_doc_slugs_are_distinct():
    slugs = get_affiliate_support_doc_slugs()

    assert len(slugs) == len(set(slugs)) == len(AFFILIATE_SUPPORT_MAPPINGS)
    assert slugs[0] == "amazon-associates-affiliate-setup-and-link-compliance"
