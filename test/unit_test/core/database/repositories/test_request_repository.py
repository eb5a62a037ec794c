"""Unit tests for the verification request repository.

Covers the pending queue ordering, multi-criteria search and dashboard counts.
"""

from datetime import date, datetime

import pytest

from verifydesk.core.database.entities import VerificationRequest
from verifydesk.core.database.repositories import RequestRepository
from verifydesk.core.models.domain.enums import RequestPriority, RequestStatus


@pytest.fixture
def repo(session):
    return RequestRepository(session)


@pytest.fixture
def make_request(repo, employee):
    counter = {"n": 0}

    async def _make(**overrides) -> VerificationRequest:
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "subject_first_name": "Subject",
            "subject_last_name": f"Number{n}",
            "requested_by_id": employee.id,
            "received_at": datetime(2026, 3, n % 28 + 1, 9, 0),
            "reference_number": f"VR-2026-{n:06d}",
        }
        fields.update(overrides)
        return await repo.create(VerificationRequest(**fields))

    return _make


class TestGetByReference:
    async def test_found(self, repo, make_request):
        created = await make_request()

        found = await repo.get_by_reference(created.reference_number)

        assert found is not None
        assert found.id == created.id

    async def test_missing(self, repo):
        assert await repo.get_by_reference("VR-1999-000001") is None


class TestListPending:
    async def test_excludes_finished_requests(self, repo, make_request):
        open_request = await make_request()
        await make_request(status=RequestStatus.completed)
        await make_request(status=RequestStatus.cancelled)
        held = await make_request(status=RequestStatus.on_hold)

        rows, total = await repo.list_pending()

        assert total == 2
        assert {r.id for r in rows} == {open_request.id, held.id}

    async def test_orders_by_priority_then_due_date_then_received(self, repo, make_request):
        low = await make_request(priority=RequestPriority.low, due_date=date(2026, 1, 1))
        normal_undated = await make_request(priority=RequestPriority.normal)
        normal_late = await make_request(priority=RequestPriority.normal, due_date=date(2026, 5, 1))
        normal_early = await make_request(priority=RequestPriority.normal, due_date=date(2026, 4, 1))
        rush = await make_request(priority=RequestPriority.rush)
        high = await make_request(priority=RequestPriority.high)

        rows, _ = await repo.list_pending()

        assert [r.id for r in rows] == [
            rush.id,
            high.id,
            normal_early.id,
            normal_late.id,
            normal_undated.id,
            low.id,
        ]

    async def test_same_priority_and_due_date_oldest_first(self, repo, make_request):
        newer = await make_request(received_at=datetime(2026, 3, 10, 12, 0))
        older = await make_request(received_at=datetime(2026, 3, 2, 8, 0))

        rows, _ = await repo.list_pending()

        assert [r.id for r in rows] == [older.id, newer.id]

    async def test_pagination_keeps_total(self, repo, make_request):
        for _ in range(5):
            await make_request()

        rows, total = await repo.list_pending(limit=2, offset=2)

        assert total == 5
        assert len(rows) == 2

    async def test_filter_by_verifier(self, repo, make_request, verifier):
        mine = await make_request(verifier_id=verifier.id)
        await make_request()

        rows, total = await repo.list_pending(verifier_id=verifier.id)

        assert total == 1
        assert rows[0].id == mine.id


class TestSearch:
    async def test_name_matches_first_or_last_partially(self, repo, make_request):
        dana = await make_request(subject_first_name="Dana", subject_last_name="Whitfield")
        await make_request(subject_first_name="Lee", subject_last_name="Park")

        by_first, _ = await repo.search(name="dan")
        by_last, _ = await repo.search(name="WHIT")

        assert [r.id for r in by_first] == [dana.id]
        assert [r.id for r in by_last] == [dana.id]

    async def test_every_name_word_must_match(self, repo, make_request):
        dana = await make_request(subject_first_name="Dana", subject_last_name="Whitfield")
        await make_request(subject_first_name="Dana", subject_last_name="Park")

        rows, total = await repo.search(name="dana whit")

        assert total == 1
        assert rows[0].id == dana.id

    async def test_reference_number_partial(self, repo, make_request):
        target = await make_request(reference_number="VR-2025-000777")
        await make_request()

        rows, _ = await repo.search(reference_number="2025-0007")

        assert [r.id for r in rows] == [target.id]

    async def test_wildcards_in_criteria_are_literal(self, repo, make_request):
        await make_request(subject_first_name="Dana", subject_last_name="Whitfield")
        underscored = await make_request(subject_first_name="Jo_Ann", subject_last_name="Hale")

        by_percent, percent_total = await repo.search(name="%")
        by_underscore, _ = await repo.search(name="o_a")
        by_reference, reference_total = await repo.search(reference_number="VR_2026")

        assert by_percent == [] and percent_total == 0
        assert [r.id for r in by_underscore] == [underscored.id]
        assert by_reference == [] and reference_total == 0

    async def test_status_filter_accepts_several(self, repo, make_request):
        held = await make_request(status=RequestStatus.on_hold)
        done = await make_request(status=RequestStatus.completed)
        await make_request()

        rows, total = await repo.search(statuses=[RequestStatus.on_hold, RequestStatus.completed])

        assert total == 2
        assert {r.id for r in rows} == {held.id, done.id}

    async def test_received_range_is_inclusive(self, repo, make_request):
        await make_request(received_at=datetime(2026, 2, 28, 23, 59))
        first = await make_request(received_at=datetime(2026, 3, 1, 0, 0))
        last = await make_request(received_at=datetime(2026, 3, 31, 23, 59))
        await make_request(received_at=datetime(2026, 4, 1, 0, 0))

        rows, total = await repo.search(received_from=date(2026, 3, 1), received_to=date(2026, 3, 31))

        assert total == 2
        assert [r.id for r in rows] == [last.id, first.id]

    async def test_criteria_combine_and_paginate(self, repo, make_request, verifier):
        for i in range(4):
            await make_request(subject_last_name=f"Smith{i}", verifier_id=verifier.id)
        await make_request(subject_last_name="Smithers")

        rows, total = await repo.search(name="smith", verifier_id=verifier.id, limit=3, offset=0)

        assert total == 4
        assert len(rows) == 3

    async def test_no_criteria_returns_all_newest_first(self, repo, make_request):
        old = await make_request(received_at=datetime(2026, 1, 1))
        new = await make_request(received_at=datetime(2026, 6, 1))

        rows, total = await repo.search()

        assert total == 2
        assert [r.id for r in rows] == [new.id, old.id]


class TestCounts:
    async def test_count_by_status_reports_every_status(self, repo, make_request):
        await make_request()
        await make_request()
        await make_request(status=RequestStatus.completed)

        counts = await repo.count_by_status()

        assert set(counts) == set(RequestStatus)
        assert counts[RequestStatus.pending] == 2
        assert counts[RequestStatus.completed] == 1
        assert counts[RequestStatus.on_hold] == 0

    async def test_count_overdue_ignores_finished_and_undated(self, repo, make_request):
        await make_request(due_date=date(2026, 1, 1))
        await make_request(due_date=date(2026, 1, 1), status=RequestStatus.completed)
        await make_request(due_date=date(2026, 12, 1))
        await make_request()

        assert await repo.count_overdue(date(2026, 6, 1)) == 1
