"""
Tests for the core Pydantic data models.

Turns are the ledger's only content, so their invariants are checked here:
identity, immutability and the image rule for assistant turns.
"""

import pytest
from pillchat.models import (
    ASSISTANT_ROLE,
    IDLE,
    PENDING,
    USER_ROLE,
    ParsedReply,
    Prescription,
    PrescriptionItem,
    RawText,
    SectionedSummary,
    Turn,
)
from pydantic import TypeAdapter, ValidationError


class TestTurn:
    """Test Turn model validation and behavior."""

    def test_valid_turn_creation(self):
        user_turn = Turn(role=USER_ROLE, text="Aspirin", image="data:image/png;base64,AA")
        assert user_turn.role == "user"
        assert user_turn.image.startswith("data:image/png")

        assistant_turn = Turn(role=ASSISTANT_ROLE, text="Reply")
        assert assistant_turn.image is None
        assert assistant_turn.created_at.tzinfo is not None

    def test_ids_are_unique_and_increasing(self):
        turns = [Turn(role=USER_ROLE, text=str(i)) for i in range(5)]
        ids = [turn.id for turn in turns]

        assert len(set(ids)) == 5
        assert ids == sorted(ids)

    def test_assistant_turn_rejects_image(self):
        with pytest.raises(ValidationError):
            Turn(role=ASSISTANT_ROLE, text="Reply", image="data:image/png;base64,AA")

    def test_turns_are_frozen(self):
        turn = Turn(role=USER_ROLE, text="Original")

        with pytest.raises(ValidationError):
            turn.text = "Modified"
        assert turn.text == "Original"

    def test_invalid_role_validation(self):
        with pytest.raises(ValidationError) as exc_info:
            Turn(role="system", text="Test message")

        error = exc_info.value.errors()[0]
        assert error["type"] == "literal_error"

    def test_unicode_text(self):
        text = "استامینوفن 💊 Acetaminophen"
        assert Turn(role=USER_ROLE, text=text).text == text


class TestParsedReply:
    """The reply union is discriminated by ``kind``."""

    def test_constants(self):
        assert (IDLE, PENDING) == ("idle", "pending")

    @pytest.mark.parametrize(
        "data, expected_type",
        [
            ({"kind": "prescription", "items": []}, Prescription),
            ({"kind": "sections", "sections": [{"title": "T"}]}, SectionedSummary),
            ({"kind": "raw", "text": "hi"}, RawText),
        ],
    )
    def test_discriminated_validation(self, data, expected_type):
        reply = TypeAdapter(ParsedReply).validate_python(data)
        assert isinstance(reply, expected_type)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(ParsedReply).validate_python({"kind": "table"})

    def test_structural_equality(self):
        first = Prescription(items=[PrescriptionItem(drug_name="A", dosage="b")])
        second = Prescription(items=[PrescriptionItem(drug_name="A", dosage="b")])
        assert first == second
