"""Read-only service catalog registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union

FieldValue = Union[str, list[str], bool]


class CatalogFieldType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    MULTISELECT = "multiselect"


@dataclass(frozen=True)
class CatalogField:
    id: str
    label: str
    type: CatalogFieldType
    required: bool
    options: tuple[str, ...] = ()

    def empty_value(self) -> FieldValue:
        if self.type is CatalogFieldType.CHECKBOX:
            return False
        if self.type is CatalogFieldType.MULTISELECT:
            return []
        return ""


@dataclass(frozen=True)
class CatalogItem:
    slug: str
    title: str
    description: str
    category: str
    product: str
    required_fields: tuple[CatalogField, ...]

    def validate(self, values: Mapping[str, FieldValue]) -> dict[str, str]:
        """Return a field id to message map for missing required values."""

        errors: dict[str, str] = {}
        for catalog_field in self.required_fields:
            if not catalog_field.required:
                continue
            value = values.get(catalog_field.id)
            if isinstance(value, str):
                value = value.strip()
            if value is None or value == "" or value == [] or value is False:
                errors[catalog_field.id] = f"{catalog_field.label} is required."
        return errors


CATALOG_ITEMS: tuple[CatalogItem, ...] = (
    CatalogItem(
        slug="request-software-install-adobe-figma-office-addin",
        title="Request Software Install (Adobe / Figma / Office Add-in)",
        description=(
            "Submit a request for approved software installation or add-ins on a managed device."
        ),
        category="Software",
        product="Desktop Applications",
        required_fields=(
            CatalogField("softwareName", "Software / Add-in Name", CatalogFieldType.TEXT, True),
            CatalogField("deviceAsset", "Device Asset Tag or Hostname", CatalogFieldType.TEXT, True),
            CatalogField(
                "businessJustification", "Business Justification", CatalogFieldType.TEXTAREA, True
            ),
            CatalogField("neededBy", "Needed By Date", CatalogFieldType.TEXT, False),
        ),
    ),
    CatalogItem(
        slug="request-shared-mailbox-access",
        title="Request Shared Mailbox Access",
        description=(
            "Request Full Access, Send As, or Send on Behalf permissions for a shared mailbox "
            "in Microsoft 365."
        ),
        category="Access Request",
        product="Outlook",
        required_fields=(
            CatalogField("mailboxName", "Shared Mailbox Address", CatalogFieldType.TEXT, True),
            CatalogField(
                "accessType",
                "Requested Access Type",
                CatalogFieldType.SELECT,
                True,
                options=("Full Access", "Send As", "Send on Behalf", "Full Access + Send As"),
            ),
            CatalogField(
                "managerApproval",
                "Manager or Mailbox Owner Approval Reference",
                CatalogFieldType.TEXT,
                True,
            ),
            CatalogField("businessReason", "Business Reason", CatalogFieldType.TEXTAREA, True),
        ),
    ),
    CatalogItem(
        slug="request-onedrive-restore",
        title="Request OneDrive Restore (Files / Version Recovery)",
        description="Request a OneDrive file, folder, or version restore.",
        category="Data Recovery",
        product="OneDrive",
        required_fields=(
            CatalogField("affectedPath", "Affected File/Folder Path", CatalogFieldType.TEXT, True),
            CatalogField("incidentTime", "Approximate Time of Issue", CatalogFieldType.TEXT, True),
            CatalogField(
                "recoveryType",
                "Recovery Needed",
                CatalogFieldType.SELECT,
                True,
                options=("file-restore", "folder-restore", "version-recovery", "assessment"),
            ),
            CatalogField(
                "suspectedSecurityIncident",
                "Possible malware/ransomware involved",
                CatalogFieldType.CHECKBOX,
                False,
            ),
        ),
    ),
    CatalogItem(
        slug="request-device-replacement",
        title="Request Device Replacement",
        description="Request a replacement for a failing or end-of-life managed device.",
        category="Hardware",
        product="End User Device",
        required_fields=(
            CatalogField("assetTag", "Current Device Asset Tag", CatalogFieldType.TEXT, True),
            CatalogField("issueSummary", "Issue Summary", CatalogFieldType.TEXTAREA, True),
            CatalogField("businessImpact", "Business Impact", CatalogFieldType.TEXTAREA, True),
            CatalogField(
                "managerApproval", "Manager Approval Reference", CatalogFieldType.TEXT, False
            ),
        ),
    ),
)

_BY_SLUG = {item.slug: item for item in CATALOG_ITEMS}


def get_catalog_items() -> list[CatalogItem]:
    return list(CATALOG_ITEMS)


def get_catalog_item_by_slug(slug: str) -> CatalogItem | None:
    return _BY_SLUG.get(slug)
