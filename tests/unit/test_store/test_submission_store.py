"""
Unit tests for the submission store
"""

import threading
import pytest

from store import SubmissionStore, generate_submission_id
from utils.exceptions import InternalError
from tests.factories import FixedIdFactory


@pytest.mark.unit
class TestSubmissionStore:
    """Test cases for SubmissionStore"""

    def test_create_and_get(self, submission_store):
        submission = submission_store.create("q", "dev1", "미래", "미래")

        assert submission.id == "s0001"
        assert submission.quote_id == "q"
        assert submission.device_id == "dev1"
        assert submission.fill_a == "미래"
        assert submission.fill_b == "미래"
        assert submission.likes == set()
        assert submission_store.get("s0001") is submission
        assert len(submission_store) == 1

    def test_get_unknown_returns_none(self, submission_store):
        assert submission_store.get("missing") is None

    def test_list_by_quote_filters(self, submission_store):
        submission_store.create("q1", "dev1", "a", "b")
        submission_store.create("q2", "dev1", "c", "d")
        submission_store.create("q1", "dev2", "e", "f")

        ids = sorted(s.id for s in submission_store.list_by_quote("q1"))
        assert ids == ["s0001", "s0003"]
        assert submission_store.list_by_quote("nope") == []

    def test_toggle_like_twice_restores_state(self, submission_store):
        submission = submission_store.create("q", "dev1", "a", "b")

        assert submission_store.toggle_like(submission.id, "dev2") == 1
        assert "dev2" in submission.likes
        assert submission_store.toggle_like(submission.id, "dev2") == 0
        assert submission.likes == set()

    def test_toggle_like_counts_distinct_devices(self, submission_store):
        submission = submission_store.create("q", "dev1", "a", "b")
        submission_store.toggle_like(submission.id, "dev2")
        assert submission_store.toggle_like(submission.id, "dev3") == 2

    def test_toggle_like_unknown_submission(self, submission_store):
        assert submission_store.toggle_like("missing", "dev1") is None

    def test_concurrent_likes_are_not_lost(self, submission_store):
        submission = submission_store.create("q", "dev1", "a", "b")
        devices = [f"dev{i}" for i in range(50)]

        threads = [
            threading.Thread(target=submission_store.toggle_like, args=(submission.id, d))
            for d in devices
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert submission.like_count == 50

    def test_duplicate_generated_id_is_internal_error(self):
        store = SubmissionStore(id_factory=FixedIdFactory(["same", "same"]))
        store.create("q", "dev1", "a", "b")

        with pytest.raises(InternalError):
            store.create("q", "dev2", "c", "d")
        assert len(store) == 1

    def test_generate_submission_id_length(self):
        assert len(generate_submission_id()) == 12
        assert len(generate_submission_id(20)) == 20
        assert generate_submission_id() != generate_submission_id()
