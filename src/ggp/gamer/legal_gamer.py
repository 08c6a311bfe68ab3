"""LegalGamer - always plays the first legal move."""

from ggp.statemachine import Move, MoveDefinitionError, RuleStateMachine, StateMachine

from .state_machine_gamer import StateMachineGamer


class LegalGamer(StateMachineGamer):
    """Plays the first legal move. Useful as a baseline and for tests."""

    def get_initial_state_machine(self) -> StateMachine:
        return RuleStateMachine()

    def state_machine_meta_game(self, timeout: float) -> None:
        pass

    def state_machine_select_move(self, timeout: float) -> Move:
        moves = self.state_machine.get_legal_moves(self.current_state, self.role)
        if not moves:
            raise MoveDefinitionError(str(self.current_state), reason=f"no legal moves for {self.role}")
        return moves[0]
