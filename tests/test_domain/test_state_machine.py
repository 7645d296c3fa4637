"""Tests for the TokenizationStateMachine guard.

These tests verify that:
    1. The approved path reaches DONE.
    2. A declined tokenization is terminal.
    3. Out-of-order events are blocked.
"""

from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from transactor.domain.state_machine import TokenizationStateMachine


class TestHappyPath:
    def test_full_workflow(self) -> None:
        sm = TokenizationStateMachine()
        assert sm.status == "NO_TOKEN"

        sm.begin_tokenization()
        assert sm.status == "TOKENIZING"

        sm.tokenization_approved()
        assert sm.status == "TOKENIZED"

        sm.begin_charge()
        assert sm.status == "CHARGING"

        sm.charge_finished()
        assert sm.status == "DONE"
        assert sm.is_finished


class TestFailurePath:
    def test_declined_tokenization_is_terminal(self) -> None:
        sm = TokenizationStateMachine()
        sm.begin_tokenization()
        sm.tokenization_declined()

        assert sm.status == "TOKENIZATION_FAILED"
        assert sm.is_finished
        with pytest.raises(TransitionNotAllowed):
            sm.begin_charge()


class TestIllegalTransitions:
    def test_cannot_charge_before_tokenizing(self) -> None:
        sm = TokenizationStateMachine()
        with pytest.raises(TransitionNotAllowed):
            sm.begin_charge()

    def test_cannot_approve_twice(self) -> None:
        sm = TokenizationStateMachine("TOKENIZED")
        with pytest.raises(TransitionNotAllowed):
            sm.tokenization_approved()

    def test_done_is_final(self) -> None:
        sm = TokenizationStateMachine("DONE")
        with pytest.raises(TransitionNotAllowed):
            sm.begin_tokenization()

    def test_invalid_status(self) -> None:
        with pytest.raises(ValueError, match="Unknown status"):
            TokenizationStateMachine("CHARGED")
