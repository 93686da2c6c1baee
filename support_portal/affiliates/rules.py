"""Declarative affiliate match rules keyed to support docs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AffiliateMatchRule:
    """Conditions that make an affiliate relevant to a KB article.

    Every condition is optional; an empty rule never matches anything.
    """

    slugs: frozenset[str] = frozenset()
    product_families: frozenset[str] = frozenset()
    categories: frozenset[str] = frozenset()
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class AffiliateSupportMapping:
    affiliate_key: str
    support_doc_slug: str
    priority: int
    rule: AffiliateMatchRule


def _rule(
    *,
    slugs: tuple[str, ...] = (),
    product_families: tuple[str, ...] = (),
    categories: tuple[str, ...] = (),
    tags: tuple[str, ...] = (),
) -> AffiliateMatchRule:
    return AffiliateMatchRule(
        slugs=frozenset(slugs),
        product_families=frozenset(product_families),
        categories=frozenset(categories),
        tags=tags,
    )


AFFILIATE_SUPPORT_MAPPINGS: tuple[AffiliateSupportMapping, ...] = (
    AffiliateSupportMapping(
        affiliate_key="amazon-it-gear",
        support_doc_slug="amazon-associates-affiliate-setup-and-link-compliance",
        priority=70,
        rule=_rule(
            categories=("Windows", "macOS", "Networking / VPN", "Printers / Scanners", "AV / Conference Rooms"),
            tags=("dock", "monitor", "keyboard", "printer", "usb", "adapter", "wifi", "network"),
        ),
    ),
    AffiliateSupportMapping(
        affiliate_key="adobe-affiliate",
        support_doc_slug="adobe-affiliate-partnerize-setup-and-attribution-validation",
        priority=100,
        rule=_rule(product_families=("Adobe",), categories=("Adobe",)),
    ),
    AffiliateSupportMapping(
        affiliate_key="onepassword-affiliate",
        support_doc_slug="onepassword-affiliate-cj-setup-and-conversion-testing",
        priority=95,
        rule=_rule(
            categories=("Identity / MFA / SSO",),
            tags=("mfa", "identity", "security", "password", "credential", "sso"),
            product_families=("Microsoft", "Okta"),
        ),
    ),
    AffiliateSupportMapping(
        affiliate_key="malwarebytes-affiliate",
        support_doc_slug="malwarebytes-affiliate-setup-and-security-safe-promotion",
        priority=90,
        rule=_rule(
            categories=("Windows", "macOS", "Browsers", "Identity / MFA / SSO"),
            tags=("security", "malware", "phishing", "browser", "endpoint", "threat"),
        ),
    ),
    AffiliateSupportMapping(
        affiliate_key="grammarly-affiliate",
        support_doc_slug="grammarly-affiliate-impact-setup-and-link-governance",
        priority=60,
        rule=_rule(
            categories=("Microsoft 365", "Adobe", "Figma", "Business / Partnerships"),
            tags=("documentation", "writing", "communication", "policy", "template"),
        ),
    ),
    AffiliateSupportMapping(
        affiliate_key="surfshark-affiliate",
        support_doc_slug="surfshark-affiliate-placement-and-policy-compliant-positioning",
        priority=65,
        rule=_rule(
            categories=("Networking / VPN", "Browsers"),
            tags=("vpn", "privacy", "public-wifi", "remote-work", "network"),
        ),
    ),
    AffiliateSupportMapping(
        affiliate_key="proton-partners",
        support_doc_slug="proton-partners-affiliate-setup-and-privacy-safe-messaging",
        priority=75,
        rule=_rule(
            categories=("Identity / MFA / SSO", "Networking / VPN", "Business / Partnerships"),
            tags=("privacy", "security", "email", "encryption"),
        ),
    ),
    AffiliateSupportMapping(
        affiliate_key="apple-performance-partners",
        support_doc_slug="apple-services-performance-partners-onboarding-and-approval-notes",
        priority=55,
        rule=_rule(
            product_families=("Apple", "Mobile"),
            categories=("macOS", "iOS", "Business / Partnerships"),
            tags=("apple", "ios", "macos", "app-store"),
        ),
    ),
)


def get_affiliate_support_mappings() -> list[AffiliateSupportMapping]:
    return list(AFFILIATE_SUPPORT_MAPPINGS)


def get_affiliate_support_doc_slugs() -> list[str]:
    """Distinct support doc slugs in mapping order."""

    return list(dict.fromkeys(mapping.support_doc_slug for mapping in AFFILIATE_SUPPORT_MAPPINGS))
