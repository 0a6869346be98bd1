"""Tests for the Ledger pillar implementations."""

import pytest
from pillchat.ledger import InMemory, Ledger
from pillchat.models import ASSISTANT_ROLE, USER_ROLE, Turn


class TestLedgerInterface:
    """Test the Ledger abstract base class interface."""

    def test_ledger_is_abstract(self):
        with pytest.raises(TypeError) as exc_info:
            Ledger()

        assert "abstract" in str(exc_info.value).lower()

    def test_ledger_requires_all_methods(self):
        class IncompleteLedger(Ledger):
            def append(self, turn):
                pass

            def all(self):
                return []

        with pytest.raises(TypeError) as exc_info:
            IncompleteLedger()

        assert "clear" in str(exc_info.value)


class TestInMemory:
    """Test the in-memory ledger."""

    def test_starts_empty(self):
        ledger = InMemory()
        assert ledger.all() == []
        assert len(ledger) == 0

    def test_append_preserves_order(self, sample_turns):
        ledger = InMemory()
        for turn in sample_turns:
            ledger.append(turn)

        assert [turn.id for turn in ledger.all()] == [turn.id for turn in sample_turns]
        assert len(ledger) == len(sample_turns)

    def test_no_deduplication(self):
        ledger = InMemory()
        turn = Turn(role=USER_ROLE, text="same")
        ledger.append(turn)
        ledger.append(turn)

        assert len(ledger) == 2

    def test_all_returns_a_copy(self):
        ledger = InMemory()
        ledger.append(Turn(role=USER_ROLE, text="first"))

        snapshot = ledger.all()
        snapshot.append(Turn(role=ASSISTANT_ROLE, text="injected"))
        snapshot.reverse()

        assert [turn.text for turn in ledger.all()] == ["first"]

    def test_clear_removes_everything(self, sample_turns):
        ledger = InMemory()
        for turn in sample_turns:
            ledger.append(turn)

        ledger.clear()

        assert ledger.all() == []

    def test_get_by_id(self, sample_turns):
        ledger = InMemory()
        for turn in sample_turns:
            ledger.append(turn)

        assert ledger.get(sample_turns[2].id) is sample_turns[2]
        assert ledger.get(-1) is None
