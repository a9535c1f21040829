"""Testes do valor Session, guards e ScreenTransition."""

from __future__ import annotations

from dataclasses import replace

import pytest

from flowdoc import Flow
from navigation import (
    ComponentActivated,
    GuardResult,
    PendingEffect,
    ScreenTransition,
    SessionStatus,
    evaluate_guards,
    new_session,
    reduce,
)
from navigation.rules.guards import BACK_GUARDS, guard_history_not_empty
from navigation.states import Session


def _pending(generation: int = 1) -> PendingEffect:
    return PendingEffect(
        generation=generation, completion_target="ticket", source_component_id="btn_enqueue"
    )


class TestSessionStatus:
    def test_status_precedence(self, flow: Flow) -> None:
        """DEGRADED > EFFECT_PENDING > ACTIVE."""
        session = new_session(flow)
        assert session.status == SessionStatus.ACTIVE

        pending = replace(session, pending_effect=_pending())
        assert pending.status == SessionStatus.EFFECT_PENDING
        assert pending.effect_in_progress

        degraded = replace(pending, dangling_target="missing")
        assert degraded.status == SessionStatus.DEGRADED
        assert str(degraded.status) == "DEGRADED"

    def test_session_is_immutable(self, flow: Flow) -> None:
        session = new_session(flow)
        with pytest.raises(AttributeError):
            session.current_screen_id = "form"  # type: ignore[misc]


class TestSessionSerialization:
    def test_round_trip_with_pending_effect(self, flow: Flow) -> None:
        session = reduce(new_session(flow), ComponentActivated("btn_next")).session
        session = replace(
            session,
            inputs={"inp_cpf": "12345678901"},
            pending_effect=_pending(3),
            effect_generation=3,
        )

        restored = Session.from_dict(session.to_dict())

        assert restored == session

    def test_round_trip_degraded(self, dangling_flow: Flow) -> None:
        session = reduce(new_session(dangling_flow), ComponentActivated("btn_broken")).session
        restored = Session.from_dict(session.to_dict())
        assert restored.dangling_target == "missing_screen"
        assert restored.status == SessionStatus.DEGRADED

    def test_pending_effect_round_trip(self) -> None:
        pending = _pending(7)
        assert PendingEffect.from_dict(pending.to_dict()) == pending


class TestGuards:
    def test_guard_result_factories(self) -> None:
        assert GuardResult.allow().allowed
        denied = GuardResult.deny("x")
        assert not denied.allowed
        assert denied.reason == "x"

    def test_first_denial_wins(self, flow: Flow) -> None:
        session = replace(new_session(flow), pending_effect=_pending())
        result = evaluate_guards(session, BACK_GUARDS)
        assert result.reason == "effect_in_progress"

    def test_history_guard(self, flow: Flow) -> None:
        session = new_session(flow)
        assert not guard_history_not_empty(session).allowed
        assert guard_history_not_empty(replace(session, history=("welcome",))).allowed

    def test_default_guards_allow_idle_session(self, flow: Flow) -> None:
        assert evaluate_guards(new_session(flow)).allowed


class TestScreenTransition:
    def test_empty_trigger_rejected(self) -> None:
        with pytest.raises(ValueError, match="trigger"):
            ScreenTransition(from_screen="a", to_screen="b", trigger=" ")

    def test_log_dict_is_serializable(self) -> None:
        transition = ScreenTransition(
            from_screen="a", to_screen="b", trigger="back", metadata={"component_id": "x"}
        )
        data = transition.to_log_dict()
        assert data["from_screen"] == "a"
        assert data["trigger"] == "back"
        assert isinstance(data["timestamp"], str)
