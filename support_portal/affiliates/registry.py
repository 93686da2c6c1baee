"""Read-only affiliate link registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AffiliateStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    PAUSED = "paused"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AffiliateLink:
    key: str
    label: str
    url: str
    network: str
    status: AffiliateStatus = AffiliateStatus.ACTIVE
    description: str = ""


AFFILIATE_LINKS: tuple[AffiliateLink, ...] = (
    AffiliateLink(
        key="amazon-it-gear",
        label="Amazon IT Gear Picks",
        url="https://amzn.to/4b1Cr3z",
        network="Amazon Associates",
        description=(
            "Recommended keyboards, docks, adapters, and accessories for enterprise support "
            "and productivity setups."
        ),
    ),
    AffiliateLink(
        key="adobe-affiliate",
        label="Adobe Creative Cloud",
        url="https://www.adobe.com/affiliates.html",
        network="Partnerize",
    ),
    AffiliateLink(
        key="onepassword-affiliate",
        label="1Password",
        url="https://1password.com/affiliate",
        network="CJ",
    ),
    AffiliateLink(
        key="malwarebytes-affiliate",
        label="Malwarebytes",
        url="https://www.malwarebytes.com/affiliates",
        network="Impact",
    ),
    AffiliateLink(
        key="grammarly-affiliate",
        label="Grammarly",
        url="https://www.grammarly.com/affiliates",
        network="Impact",
    ),
    AffiliateLink(
        key="surfshark-affiliate",
        label="Surfshark VPN",
        url="https://surfshark.com/affiliates",
        network="Impact",
    ),
    AffiliateLink(
        key="proton-partners",
        label="Proton",
        url="https://proton.me/partners",
        network="Proton Partners",
        status=AffiliateStatus.PENDING,
    ),
    AffiliateLink(
        key="apple-performance-partners",
        label="Apple Services",
        url="https://www.apple.com/itunes/affiliates/",
        network="Apple Services Performance Partners",
        status=AffiliateStatus.PENDING,
    ),
)

_BY_KEY = {link.key: link for link in AFFILIATE_LINKS}


def get_affiliate_links() -> list[AffiliateLink]:
    return list(AFFILIATE_LINKS)


def get_affiliate_link_by_key(key: str) -> AffiliateLink | None:
    return _BY_KEY.get(key)
