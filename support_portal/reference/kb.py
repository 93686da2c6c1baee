"""Read-only knowledge-base article registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class KBArticle:
    """Attributes of a KB article consumed by analytics and recommendations."""

    slug: str
    title: str
    category: str
    product_family: str
    product: str
    tags: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        *,
        slug: str,
        title: str,
        category: str,
        product_family: str,
        product: str,
        tags: Sequence[str] = (),
    ) -> "KBArticle":
        """Build an article with trimmed, lowercased, de-duplicated tags."""

        normalized = dict.fromkeys(tag.strip().lower() for tag in tags if tag.strip())
        return cls(
            slug=slug,
            title=title,
            category=category,
            product_family=product_family,
            product=product,
            tags=tuple(normalized),
        )


KB_ARTICLES: tuple[KBArticle, ...] = (
    KBArticle.create(
        slug="outlook-search-not-working-windows-macos",
        title="Outlook Search Not Returning Expected Results",
        category="Microsoft 365",
        product_family="Microsoft",
        product="Outlook",
        tags=["outlook", "search", "indexing", "mailbox", "windows", "macos"],
    ),
    KBArticle.create(
        slug="teams-microphone-not-detected-enterprise",
        title="Teams Microphone Not Detected (Enterprise Workstations)",
        category="Microsoft 365",
        product_family="Microsoft",
        product="Microsoft Teams",
        tags=["teams", "microphone", "audio", "permissions", "windows", "macos"],
    ),
    KBArticle.create(
        slug="mfa-device-lost-account-recovery-enterprise",
        title="MFA Device Lost (Enterprise Account Recovery)",
        category="Identity / MFA / SSO",
        product_family="Microsoft",
        product="Microsoft Entra ID",
        tags=["mfa", "authenticator", "identity", "recovery", "entra-id", "security"],
    ),
    KBArticle.create(
        slug="adobe-creative-cloud-desktop-app-not-opening",
        title="Adobe Creative Cloud Desktop App Not Opening",
        category="Adobe",
        product_family="Adobe",
        product="Adobe Creative Cloud",
        tags=["adobe", "creative-cloud", "desktop-app", "launch", "cache"],
    ),
    KBArticle.create(
        slug="figma-desktop-app-wont-open",
        title="Figma Desktop App Won't Open",
        category="Figma",
        product_family="Figma",
        product="Figma Desktop App",
        tags=["figma", "desktop-app", "launch", "cache", "startup"],
    ),
    KBArticle.create(
        slug="windows-printer-job-stuck-in-queue",
        title="Windows Printer Job Stuck in Queue",
        category="Printers / Scanners",
        product_family="Print",
        product="Windows Print Spooler",
        tags=["printer", "windows", "queue", "spooler", "printing"],
    ),
    KBArticle.create(
        slug="vpn-connects-but-no-internal-resources",
        title="VPN Connects but Internal Resources Are Unreachable",
        category="Networking / VPN",
        product_family="Networking",
        product="Corporate VPN",
        tags=["vpn", "network", "dns", "remote-work", "split-tunnel"],
    ),
)

_BY_SLUG = {article.slug: article for article in KB_ARTICLES}


def get_kb_articles() -> list[KBArticle]:
    return list(KB_ARTICLES)


def get_kb_article_by_slug(slug: str) -> KBArticle | None:
    return _BY_SLUG.get(slug)
