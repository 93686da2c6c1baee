from support_portal.core.config import Settings
from support_portal.main import create_portal
from support_portal.storage import InMemoryBackend, JsonFileBackend
from support_portal.tickets.models import Impact, TicketDraft, TicketType, Urgency


def test_create_portal_wires_shared_store(clock):
    backend = InMemoryBackend()
    portal = create_portal(Settings(_env_file=None, storage_backend="memory"), backend=backend, clock=clock)

    ticket = portal.tickets.create_ticket(
        TicketDraft(
            type=TicketType.INCIDENT,
            impact=Impact.LOW,
            urgency=Urgency.HIGH,
            category="Printers / Scanners",
            product="Printer",
            summary="Jobs stuck in queue",
        )
    )
    portal.admin.enable_admin_mode()

    assert portal.store.backend is backend
    assert portal.tracer_provider is None
    summary = portal.analytics.summary(portal.tickets.list_tickets())
    assert summary.totals.incident_submissions == 1
    assert summary.incidents_by_priority[0].label == ticket.priority.value
    assert portal.preferences.is_admin_enabled()
    portal.close()


def test_file_backend_from_settings(tmp_path):
    settings = Settings(_env_file=None, storage_path=str(tmp_path / "profile"), storage_namespace="demo")
    portal = create_portal(settings)

    portal.admin.seed_demo_tickets()

    assert isinstance(portal.store.backend, JsonFileBackend)
    assert (tmp_path / "profile" / "demo%3Atickets%3Av1.json").exists()
    reopened = create_portal(settings)
    assert len(reopened.tickets.list_tickets()) == 5
