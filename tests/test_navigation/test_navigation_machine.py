"""
Testes da máquina de navegação (redutor puro + NavigationMachine).

Cobre: goto/back/restart, gate de validação, exclusividade de efeito,
descarte de conclusões antigas, estado degradado e troca de fluxo.
"""

from __future__ import annotations

from typing import Any

import pytest

from flowdoc import Flow, parse_flow
from navigation import (
    BackRequested,
    ComponentActivated,
    EffectCompleted,
    FlowLoaded,
    InputChanged,
    NavigationMachine,
    RestartRequested,
    Session,
    SessionStatus,
    create_machine,
    new_session,
    reduce,
)


def _assert_initial(session: Session) -> None:
    assert session.current_screen_id == session.flow.start_screen_id
    assert session.history == ()
    assert dict(session.inputs) == {}
    assert dict(session.validation_errors) == {}
    assert session.pending_effect is None
    assert session.dangling_target is None


def _machine_on_form(flow: Flow) -> NavigationMachine:
    machine = create_machine(flow, session_key="k-test")
    machine.activate("btn_next")
    assert machine.current_screen_id == "form"
    return machine


class TestInitialStateAndGoto:
    def test_new_session_starts_at_entry_point(self, flow: Flow) -> None:
        session = new_session(flow)
        _assert_initial(session)
        assert session.status == SessionStatus.ACTIVE
        assert not session.can_go_back

    def test_goto_pushes_history_and_keeps_inputs(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")
        machine.set_input("inp_name", "Ana")

        result = machine.activate("btn_submit")

        assert result.accepted
        assert machine.current_screen_id == "done"
        assert machine.session.history == ("welcome", "form")
        assert machine.session.inputs == {"inp_cpf": "12345678901", "inp_name": "Ana"}
        assert result.transition is not None
        assert result.transition.trigger == "goto_screen"
        assert result.transition.metadata["component_id"] == "btn_submit"

    def test_reducer_is_pure(self, flow: Flow) -> None:
        session = new_session(flow)
        result = reduce(session, ComponentActivated("btn_next"))

        assert session.current_screen_id == "welcome"
        assert result.session.current_screen_id == "form"

    def test_connected_flow_never_degrades(self, flow: Flow) -> None:
        """Fluxo sem targets pendentes nunca entra no estado degradado."""
        session = new_session(flow)
        for component_id in ("btn_info", "btn_back_home") * 5:
            session = reduce(session, ComponentActivated(component_id)).session
            assert session.status == SessionStatus.ACTIVE
        assert session.current_screen_id == "welcome"
        assert len(session.history) == 10

    def test_unknown_component_is_rejected(self, flow: Flow) -> None:
        result = reduce(new_session(flow), ComponentActivated("nao_existe"))
        assert result.rejected_reason == "unknown_component"

    def test_component_of_other_screen_is_rejected(self, flow: Flow) -> None:
        result = reduce(new_session(flow), ComponentActivated("btn_submit"))
        assert result.rejected_reason == "unknown_component"

    def test_unknown_event_type_raises(self, flow: Flow) -> None:
        with pytest.raises(TypeError):
            reduce(new_session(flow), object())  # type: ignore[arg-type]


class TestValidationGate:
    """Campo com regex ^\\d{11}$ bloqueia o avanço até ser válido."""

    def test_invalid_value_blocks_and_surfaces_error(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "123")

        result = machine.activate("btn_submit")

        assert not result.accepted
        assert result.rejected_reason == "validation_failed"
        assert machine.current_screen_id == "form"
        assert machine.session.validation_errors["inp_cpf"] == "CPF deve ter 11 dígitos"

    def test_valid_value_clears_errors_and_advances(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "123")
        machine.activate("btn_submit")

        machine.set_input("inp_cpf", "12345678901")
        result = machine.activate("btn_submit")

        assert result.accepted
        assert machine.current_screen_id == "done"
        assert machine.session.validation_errors == {}

    def test_changing_value_clears_only_that_field_error(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.activate("btn_submit")
        assert "inp_cpf" in machine.session.validation_errors

        machine.set_input("inp_cpf", "1")

        assert "inp_cpf" not in machine.session.validation_errors

    def test_setting_same_value_keeps_error(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "123")
        machine.activate("btn_submit")

        machine.set_input("inp_cpf", "123")

        assert "inp_cpf" in machine.session.validation_errors

    def test_input_for_non_input_component_rejected(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        result = machine.set_input("btn_submit", "x")
        assert result.rejected_reason == "unknown_input"
        assert "btn_submit" not in machine.session.inputs


class TestBack:
    def test_back_after_n_gotos_returns_to_previous(self, flow: Flow) -> None:
        machine = create_machine(flow)
        machine.activate("btn_info")
        machine.activate("btn_back_home")
        machine.activate("btn_next")

        machine.back()
        assert machine.current_screen_id == "welcome"
        machine.back()
        assert machine.current_screen_id == "info"
        machine.back()
        assert machine.current_screen_id == "welcome"
        assert machine.session.history == ()

    def test_back_with_empty_history_is_noop(self, flow: Flow) -> None:
        session = new_session(flow)
        first = reduce(session, BackRequested())
        second = reduce(first.session, BackRequested())

        assert first.session == session
        assert second.session == session
        assert first.rejected_reason == "history_empty"
        assert first.transition is None

    def test_back_clears_errors_but_keeps_inputs(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "123")
        machine.activate("btn_submit")

        machine.back()

        assert machine.current_screen_id == "welcome"
        assert machine.session.validation_errors == {}
        assert machine.session.inputs == {"inp_cpf": "123"}


class TestRestart:
    def test_restart_resets_everything(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "123")
        machine.activate("btn_submit")

        result = machine.restart()

        assert result.accepted
        _assert_initial(machine.session)

    def test_restart_action_button_resets(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")
        machine.activate("btn_submit")

        result = machine.activate("btn_done")

        assert result.transition is not None
        assert result.transition.trigger == "restart_action"
        _assert_initial(machine.session)

    def test_restart_mid_effect_cancels_and_ignores_late_completion(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")
        started = machine.activate("btn_enqueue").started_effect
        assert started is not None

        result = machine.restart()

        assert result.cancelled_effect == started
        _assert_initial(machine.session)

        late = machine.complete_effect(started.generation)

        assert late.rejected_reason == "stale_effect_completion"
        _assert_initial(machine.session)


class TestAsyncEffect:
    def test_enqueue_enters_effect_pending(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")

        result = machine.activate("btn_enqueue")

        assert result.started_effect is not None
        assert result.started_effect.completion_target == "ticket"
        assert result.transition is None
        assert machine.session.status == SessionStatus.EFFECT_PENDING
        assert machine.current_screen_id == "form"

    def test_second_dispatch_while_pending_is_noop(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")
        machine.activate("btn_enqueue")
        before = machine.session

        for component_id in ("btn_enqueue", "btn_submit"):
            result = machine.activate(component_id)
            assert result.rejected_reason == "effect_in_progress"
            assert result.started_effect is None

        assert machine.set_input("inp_name", "x").rejected_reason == "effect_in_progress"
        assert machine.back().rejected_reason == "effect_in_progress"
        assert machine.session == before

    def test_completion_navigates_to_target(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")
        started = machine.activate("btn_enqueue").started_effect
        assert started is not None

        result = machine.complete_effect(started.generation)

        assert result.accepted
        assert machine.current_screen_id == "ticket"
        assert machine.session.pending_effect is None
        assert machine.session.history == ("welcome", "form")
        assert result.transition is not None
        assert result.transition.trigger == "effect_completed"

    def test_duplicate_completion_is_discarded(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")
        started = machine.activate("btn_enqueue").started_effect
        assert started is not None
        machine.complete_effect(started.generation)

        again = machine.complete_effect(started.generation)

        assert again.rejected_reason == "stale_effect_completion"
        assert machine.current_screen_id == "ticket"

    def test_generation_keeps_growing_across_restarts(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")
        first = machine.activate("btn_enqueue").started_effect
        machine.restart()
        machine.activate("btn_next")
        machine.set_input("inp_cpf", "12345678901")
        second = machine.activate("btn_enqueue").started_effect

        assert first is not None and second is not None
        assert second.generation > first.generation
        assert machine.complete_effect(first.generation).rejected_reason == (
            "stale_effect_completion"
        )
        assert machine.complete_effect(second.generation).accepted

    def test_failed_effect_returns_to_active_on_same_screen(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")
        started = machine.activate("btn_enqueue").started_effect
        assert started is not None

        stale = machine.fail_effect(started.generation + 1, "enqueue_failed")
        assert stale.rejected_reason == "stale_effect_completion"
        assert machine.session.status == SessionStatus.EFFECT_PENDING

        result = machine.fail_effect(started.generation, "enqueue_failed")

        assert result.accepted
        assert result.transition is None
        assert machine.session.status == SessionStatus.ACTIVE
        assert machine.current_screen_id == "form"
        assert machine.session.inputs["inp_cpf"] == "12345678901"
        assert machine.complete_effect(started.generation).rejected_reason == (
            "stale_effect_completion"
        )

    def test_completion_to_missing_target_degrades(self, dangling_flow: Flow) -> None:
        machine = create_machine(dangling_flow)
        started = machine.activate("btn_broken_enqueue").started_effect
        assert started is not None

        machine.complete_effect(started.generation)

        assert machine.session.status == SessionStatus.DEGRADED
        assert machine.session.dangling_target == "missing_ticket"


class TestDegradedState:
    def test_missing_target_scenario(self, dangling_flow: Flow) -> None:
        """welcome → missing_screen degrada; restart volta limpo para welcome."""
        machine = create_machine(dangling_flow)

        result = machine.activate("btn_broken")

        assert result.accepted
        assert machine.session.status == SessionStatus.DEGRADED
        assert machine.session.dangling_target == "missing_screen"
        assert machine.session.current_screen is None
        assert result.transition is not None
        assert result.transition.metadata["dangling"] is True

        machine.restart()

        assert machine.current_screen_id == "welcome"
        _assert_initial(machine.session)

    def test_degraded_state_accepts_only_restart(self, dangling_flow: Flow) -> None:
        machine = create_machine(dangling_flow)
        machine.activate("btn_broken")
        degraded = machine.session

        assert machine.back().rejected_reason == "session_degraded"
        assert machine.activate("btn_broken").rejected_reason == "session_degraded"
        assert machine.set_input("x", "1").rejected_reason == "session_degraded"
        assert machine.session == degraded
        assert not degraded.can_go_back


class TestFlowLoaded:
    def test_new_flow_identity_forces_restart(
        self, flow: Flow, flow_data: dict[str, Any]
    ) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "123")
        other = parse_flow({**flow_data, "flow_id": "other-flow"})

        result = machine.apply(FlowLoaded(other))

        assert result.transition is not None
        assert result.transition.trigger == "flow_identity_changed"
        assert machine.flow is other
        _assert_initial(machine.session)

    def test_same_identity_keeps_position_and_inputs(
        self, flow: Flow, flow_data: dict[str, Any]
    ) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "123")
        machine.activate("btn_submit")
        flow_data["screens"]["form"]["title"] = "Identificação (editada)"
        edited = parse_flow(flow_data)

        result = machine.load_flow(edited)

        assert result.transition is not None
        assert result.transition.trigger == "flow_updated"
        assert machine.current_screen_id == "form"
        assert machine.session.history == ("welcome",)
        assert machine.session.inputs == {"inp_cpf": "123"}
        assert machine.session.validation_errors == {}
        assert machine.session.current_screen is not None
        assert machine.session.current_screen.title == "Identificação (editada)"

    def test_flow_load_cancels_pending_effect(self, flow: Flow, flow_data: dict[str, Any]) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "12345678901")
        started = machine.activate("btn_enqueue").started_effect

        result = machine.load_flow(parse_flow(flow_data))

        assert result.cancelled_effect == started
        assert machine.session.pending_effect is None

    def test_same_identity_without_current_screen_degrades(
        self, flow: Flow, flow_data: dict[str, Any]
    ) -> None:
        machine = _machine_on_form(flow)
        del flow_data["screens"]["form"]
        flow_data["screens"]["welcome"]["components"] = []

        machine.load_flow(parse_flow(flow_data))

        assert machine.session.status == SessionStatus.DEGRADED
        assert machine.session.dangling_target == "form"

    def test_back_into_screen_removed_by_edit_degrades(
        self, flow: Flow, flow_data: dict[str, Any]
    ) -> None:
        machine = _machine_on_form(flow)
        del flow_data["screens"]["welcome"]
        flow_data["start_screen_id"] = "form"
        machine.load_flow(parse_flow(flow_data))
        assert machine.session.status == SessionStatus.ACTIVE

        result = machine.back()

        assert result.accepted
        assert machine.current_screen_id == "welcome"
        assert machine.session.status == SessionStatus.DEGRADED
        assert machine.session.dangling_target == "welcome"

        machine.restart()
        assert machine.current_screen_id == "form"
        assert machine.session.status == SessionStatus.ACTIVE


class TestMachineAudit:
    def test_history_log_records_applied_transitions_only(self, flow: Flow) -> None:
        machine = create_machine(flow, session_key="k-1")
        machine.activate("btn_next")
        machine.activate("btn_submit")  # bloqueado por validação
        machine.back()

        triggers = [t.trigger for t in machine.history_log]
        assert triggers == ["goto_screen", "back"]
        assert machine.get_history_summary()[0]["to_screen"] == "form"

    def test_history_log_is_a_copy(self, flow: Flow) -> None:
        machine = create_machine(flow)
        machine.activate("btn_next")
        machine.history_log.clear()
        assert len(machine.history_log) == 1

    def test_state_summary_never_contains_input_values(self, flow: Flow) -> None:
        machine = _machine_on_form(flow)
        machine.set_input("inp_cpf", "98765432100")

        summary = machine.get_state_summary()

        assert summary["kiosk_session_id"] == "k-test"
        assert summary["input_count"] == 1
        assert "98765432100" not in str(summary)

    def test_apply_accepts_explicit_events(self, flow: Flow) -> None:
        machine = create_machine(flow)
        machine.apply(ComponentActivated("btn_next"))
        machine.apply(InputChanged("inp_cpf", "12345678901"))
        started = machine.apply(ComponentActivated("btn_enqueue")).started_effect
        assert started is not None
        machine.apply(EffectCompleted(started.generation))
        assert machine.current_screen_id == "ticket"
        machine.apply(RestartRequested())
        assert machine.current_screen_id == "welcome"
