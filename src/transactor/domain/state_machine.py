"""Tokenize-before-charge workflow guard.

Uses python-statemachine to enforce the order of the tokenization
sub-workflow. A machine is created per ``transact`` call that needs a token;
an account that already holds one never reaches it.

Transition table:
    NO_TOKEN     -> TOKENIZING           (begin_tokenization)
    TOKENIZING   -> TOKENIZED            (tokenization_approved)
    TOKENIZING   -> TOKENIZATION_FAILED  (tokenization_declined)
    TOKENIZED    -> CHARGING             (begin_charge)
    CHARGING     -> DONE                 (charge_finished)
"""

from __future__ import annotations

from statemachine import State, StateMachine


class TokenizationStateMachine(StateMachine):
    """State machine that guards the tokenization sub-workflow.

    Usage:
        sm = TokenizationStateMachine()
        sm.begin_tokenization()
        sm.tokenization_approved()
        sm.status  # "TOKENIZED"
    """

    # --- States ---
    NO_TOKEN = State("NO_TOKEN", initial=True)
    TOKENIZING = State("TOKENIZING")
    TOKENIZED = State("TOKENIZED")
    CHARGING = State("CHARGING")
    DONE = State("DONE", final=True)
    TOKENIZATION_FAILED = State("TOKENIZATION_FAILED", final=True)

    # --- Events / Transitions ---
    begin_tokenization = NO_TOKEN.to(TOKENIZING)
    tokenization_approved = TOKENIZING.to(TOKENIZED)
    tokenization_declined = TOKENIZING.to(TOKENIZATION_FAILED)
    begin_charge = TOKENIZED.to(CHARGING)
    charge_finished = CHARGING.to(DONE)

    def __init__(self, current_status: str = "NO_TOKEN") -> None:
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value as a string."""
        return str(self.current_state.value)

    @property
    def is_finished(self) -> bool:
        return self.current_state.final
