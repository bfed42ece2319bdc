"""Tests for the RSVP status workflow and service-level capacity guarantees."""
import pytest

from eventhost.exceptions import CapacityExceededError, PublicEventInviteError
from eventhost.models.rsvp import Rsvp, RsvpStatus
from eventhost.services import capacity_service, rsvp_service, rsvp_workflow
from tests.conftest import make_event, make_user


class TestTransitions:

    @pytest.mark.parametrize("status,expected", [
        (RsvpStatus.PENDING, True),
        (RsvpStatus.YES, True),
        (RsvpStatus.MAYBE, True),
        (RsvpStatus.NO, False),
    ])
    def test_consumes_capacity(self, status, expected):
        assert rsvp_workflow.consumes_capacity(status) is expected

    def test_only_leaving_no_is_gated(self):
        for current in RsvpStatus:
            for new in RsvpStatus:
                expected = current == RsvpStatus.NO and new != RsvpStatus.NO
                assert rsvp_workflow.requires_capacity_check(current, new) is expected

    def test_options_exclude_current_status(self):
        options = rsvp_workflow.transition_options(RsvpStatus.YES, can_admit=False)
        assert [o["status"] for o in options] == [RsvpStatus.PENDING, RsvpStatus.MAYBE, RsvpStatus.NO]
        assert all(o["enabled"] for o in options)

    def test_options_from_no_follow_capacity(self):
        assert all(o["enabled"] for o in rsvp_workflow.transition_options(RsvpStatus.NO, can_admit=True))
        assert not any(o["enabled"] for o in rsvp_workflow.transition_options(RsvpStatus.NO, can_admit=False))


class TestServiceCapacity:

    def test_bulk_is_all_or_nothing(self, db):
        host = make_user(db, "Host")
        event = make_event(db, host, max_guests=2)
        guests = [make_user(db, f"Guest{i}") for i in range(3)]

        with pytest.raises(CapacityExceededError) as exc_info:
            rsvp_service.create_multiple_rsvps(db, event.id, [g.id for g in guests], host.id)
        assert exc_info.value.requested == 3
        assert db.query(Rsvp).filter(Rsvp.event_id == event.id).count() == 0

        created = rsvp_service.create_multiple_rsvps(db, event.id, [g.id for g in guests[:2]], host.id)
        assert len(created) == 2
        assert capacity_service.effective_guest_count(db, event.id) == 2

    def test_bulk_skips_host(self, db):
        host = make_user(db, "Host")
        guest = make_user(db, "Guest")
        event = make_event(db, host, max_guests=1)
        created = rsvp_service.create_multiple_rsvps(db, event.id, [host.id, guest.id, guest.id], host.id)
        assert [r.invitee_id for r in created] == [guest.id]

    def test_bulk_rejects_public_event(self, db):
        host = make_user(db, "Host")
        guest = make_user(db, "Guest")
        event = make_event(db, host, is_private=False)
        with pytest.raises(PublicEventInviteError):
            rsvp_service.create_multiple_rsvps(db, event.id, [guest.id], host.id)

    def test_switching_among_consuming_statuses_at_full_capacity(self, db):
        host = make_user(db, "Host")
        guest = make_user(db, "Guest")
        event = make_event(db, host, max_guests=1)
        rsvp = rsvp_service.create_multiple_rsvps(db, event.id, [guest.id], host.id)[0]

        for status in (RsvpStatus.YES, RsvpStatus.MAYBE, RsvpStatus.PENDING):
            assert rsvp_service.update_rsvp_status(db, rsvp.id, status, guest.id).status == status
        assert capacity_service.effective_guest_count(db, event.id) == 1

    def test_effective_count_never_exceeds_cap(self, db):
        host = make_user(db, "Host")
        event = make_event(db, host, max_guests=2)
        guests = [make_user(db, f"Guest{i}") for i in range(4)]
        rsvps = rsvp_service.create_multiple_rsvps(db, event.id, [g.id for g in guests[:2]], host.id)

        rsvp_service.update_rsvp_status(db, rsvps[0].id, RsvpStatus.NO, guests[0].id)
        rsvp_service.create_multiple_rsvps(db, event.id, [guests[2].id], host.id)
        with pytest.raises(CapacityExceededError):
            rsvp_service.update_rsvp_status(db, rsvps[0].id, RsvpStatus.YES, guests[0].id)
        with pytest.raises(CapacityExceededError):
            rsvp_service.create_multiple_rsvps(db, event.id, [guests[3].id], host.id)

        assert capacity_service.effective_guest_count(db, event.id) == 2
        assert db.query(Rsvp).filter(Rsvp.id == rsvps[0].id).one().status == RsvpStatus.NO
