from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from levelbot.adjustments import ExperienceCommands
from levelbot.game import GameState
from levelbot.models import (
    FeedbackKind,
    PlayerSession,
    ResolutionError,
    ValidationError,
    parse_exp,
)
from levelbot.storage import ExperienceStore


@pytest.fixture
def store(tmp_path: Path) -> Iterator[ExperienceStore]:
    store = ExperienceStore(tmp_path / "Leveling.sqlite")
    store.open()
    yield store
    store.close()


@pytest.fixture
def commands(store: ExperienceStore) -> ExperienceCommands:
    state = GameState()
    state.register_session(PlayerSession(index=0, name="Bob", account_id=21))
    state.register_session(PlayerSession(index=1, name="Bella", account_id=22))
    state.register_session(PlayerSession(index=2, name="Guest", uuid="feed"))
    return ExperienceCommands(store, state)


def test_set_then_add_accumulates(commands: ExperienceCommands, store: ExperienceStore) -> None:
    commands.set_level("Admin", "Bob", "100")
    result = commands.add_level("Admin", "Bob", "50")

    assert store.get("acc_21") == 150
    assert result.total == 150
    assert result.operator_message.text == "Added 50 EXP to Bob. Total: 150"


def test_subtract_clamps_at_zero(commands: ExperienceCommands, store: ExperienceStore) -> None:
    commands.set_level("Admin", "Bob", 150)

    result = commands.subtract_level("Admin", "Bob", "500")

    assert store.get("acc_21") == 0
    assert result.total == 0
    assert result.operator_message.text == "Removed 500 EXP from Bob. Total: 0"


def test_reset_writes_zero_record(commands: ExperienceCommands, store: ExperienceStore) -> None:
    store.upsert("uuid_feed", 900)

    result = commands.reset_level("Admin", "Guest")

    assert store.get("uuid_feed") == 0
    assert result.key == "uuid_feed"
    assert [message.text for message in result.messages] == [
        "Reset Guest's EXP to 0.",
        "Admin reset your EXP to 0. :(",
    ]


def test_messages_address_operator_and_target(commands: ExperienceCommands) -> None:
    result = commands.set_level("Admin", "Bob", "100")

    operator, target = result.messages
    assert operator.recipient is None
    assert operator.kind is FeedbackKind.SUCCESS
    assert operator.text == "Set Bob's EXP to 100."
    assert target.recipient is result.target
    assert target.kind is FeedbackKind.INFO
    assert target.text == "Admin set your EXP to 100."


def test_add_reports_new_total_to_target(commands: ExperienceCommands) -> None:
    commands.set_level("Admin", "Guest", "5")

    result = commands.add_level("Admin", "Guest", "10")

    assert result.messages[1].text == "Admin added 10 EXP to you. New total: 15"


def test_subtract_reports_new_total_to_target(commands: ExperienceCommands) -> None:
    commands.set_level("Admin", "Guest", "15")

    result = commands.subtract_level("Admin", "Guest", "10")

    assert result.messages[1].text == "Admin removed 10 EXP from you. New total: 5"


@pytest.mark.parametrize("value", ["-1", "ten", "", "1.5", str(2**31), True])
def test_set_rejects_invalid_exp_without_writing(
    commands: ExperienceCommands, store: ExperienceStore, value
) -> None:
    store.upsert("acc_21", 42)

    with pytest.raises(ValidationError):
        commands.set_level("Admin", "Bob", value)

    assert store.get("acc_21") == 42


def test_set_accepts_zero(commands: ExperienceCommands, store: ExperienceStore) -> None:
    store.upsert("acc_21", 42)

    commands.set_level("Admin", "Bob", "0")

    assert store.get("acc_21") == 0


@pytest.mark.parametrize("value", ["0", "-5", "abc", 0])
def test_add_and_subtract_require_positive_exp(
    commands: ExperienceCommands, store: ExperienceStore, value
) -> None:
    store.upsert("acc_21", 42)

    with pytest.raises(ValidationError, match="EXP must be a positive number."):
        commands.add_level("Admin", "Bob", value)
    with pytest.raises(ValidationError, match="EXP must be a positive number."):
        commands.subtract_level("Admin", "Bob", value)

    assert store.get("acc_21") == 42


def test_missing_arguments_report_usage(commands: ExperienceCommands) -> None:
    with pytest.raises(ValidationError, match=r"Usage: /setlevel <player> <exp>"):
        commands.set_level("Admin", "Bob", None)
    with pytest.raises(ValidationError, match=r"Usage: /resetlevel <player>"):
        commands.reset_level("Admin", "  ")


def test_amount_is_validated_before_target(commands: ExperienceCommands) -> None:
    with pytest.raises(ValidationError):
        commands.add_level("Admin", "Nobody", "-3")


@pytest.mark.parametrize(
    ("name", "count", "message"),
    [("Zed", 0, "No players matched."), ("B", 2, "More than one player matched.")],
)
def test_target_must_match_exactly_one_session(
    commands: ExperienceCommands,
    store: ExperienceStore,
    name: str,
    count: int,
    message: str,
) -> None:
    for action in (
        lambda: commands.set_level("Admin", name, "10"),
        lambda: commands.add_level("Admin", name, "10"),
        lambda: commands.subtract_level("Admin", name, "10"),
        lambda: commands.reset_level("Admin", name),
    ):
        with pytest.raises(ResolutionError) as excinfo:
            action()
        assert excinfo.value.count == count
        assert str(excinfo.value) == message

    assert store.get("acc_21") == 0
    assert store.get("acc_22") == 0


def test_my_level_reports_stored_exp(commands: ExperienceCommands, store: ExperienceStore) -> None:
    store.upsert("acc_21", 321)
    session = PlayerSession(index=0, name="Bob", account_id=21)

    feedback = commands.my_level(session)

    assert feedback.kind is FeedbackKind.INFO
    assert feedback.text == "Your current EXP: 321"
    assert commands.my_level(None).text == "Your current EXP: 0"


def test_parse_exp_accepts_signed_and_padded_text() -> None:
    assert parse_exp(" +25 ", allow_zero=False) == 25
    assert parse_exp(2**31 - 1, allow_zero=True) == 2**31 - 1


@pytest.mark.parametrize("text", ["1_000", "١٢", "12.0", "0x10", ""])
def test_parse_exp_rejects_anything_but_plain_digits(text: str) -> None:
    with pytest.raises(ValidationError, match="EXP must be a positive number."):
        parse_exp(text, allow_zero=False)
