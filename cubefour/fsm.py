from __future__ import annotations

from statemachine import State, StateMachine

from cubefour.models import GamePhase, GameState


class GameFSM(StateMachine):
    """Guards the game's phase: in progress -> won | drawn.

    Built fresh from `GameState.phase` for each move; the engine fires a
    transition and then writes the resulting phase back with `commit_phase`.
    """

    in_progress = State(GamePhase.in_progress.value, value=GamePhase.in_progress.value, initial=True)
    won = State(GamePhase.won.value, value=GamePhase.won.value, final=True)
    drawn = State(GamePhase.drawn.value, value=GamePhase.drawn.value, final=True)

    run_completed = in_progress.to(won)
    board_filled = in_progress.to(drawn)

    def __init__(self, state: GameState) -> None:
        self.game_state = state
        super().__init__(start_value=state.phase.value)

    def commit_phase(self) -> GamePhase:
        phase = GamePhase(str(self.current_state.value))
        self.game_state.phase = phase
        return phase
