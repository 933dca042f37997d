"""
Action Generator - Generates all legal actions for a seat.

The action generator is used by:
1. Bots to enumerate possible moves
2. UI to show available actions
3. Validation (is this action in legal_actions?)

Design: Generates fully-specified Action objects. Every action it
returns (other than the wait sentinel) is accepted by the reducer
when applied to the same state.
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import Action, ActionType
from .cards import CardKind
from .state import GameState

# Simple cards: kind -> factory taking (seat, card_index)
_SIMPLE_PLAYS = {
    CardKind.SKIP: Action.play_skip,
    CardKind.ATTACK: Action.play_attack,
    CardKind.SHUFFLE: Action.play_shuffle,
    CardKind.FORESIGHT: Action.play_foresight,
}


@dataclass
class ActionGenerator:
    """
    Generates legal actions for one seat in the current game state.
    """

    def generate(self, state: GameState, seat: int) -> list[Action]:
        """
        Generate all legal actions for a seat.

        Pending decisions take priority over normal play.
        """
        if state.game_over:
            return []
        player = state.get_player(seat)
        if player is None or player.eliminated:
            return []

        # A favor exchange blocks everything else
        favor = state.pending_favor
        if favor:
            if favor.giver == seat:
                return self._generate_favor_responses(state, seat)
            if favor.requester == seat:
                return [Action.wait_for_favor(seat)]
            return []

        placement = state.pending_placement
        if placement and placement.owner == seat:
            return self._generate_placements(state, seat)

        actions = self._generate_dismissals(state, seat)

        if placement or seat != state.current_seat:
            return actions

        actions = self._generate_card_plays(state, seat) + actions

        if state.draw_pile:
            actions.append(Action.draw(seat))

        return actions

    def _generate_favor_responses(self, state: GameState, seat: int) -> list[Action]:
        """One response per card the giver could hand over."""
        player = state.players[seat]
        return [Action.resolve_favor(seat, i) for i in range(len(player.hand))]

    def _generate_placements(self, state: GameState, seat: int) -> list[Action]:
        """
        Four candidate positions: top, one third, two thirds, bottom.

        A reduced set keeps the computer's choice small.
        """
        n = len(state.draw_pile)
        return [
            Action.place_hazard(seat, 0),
            Action.place_hazard(seat, n // 3),
            Action.place_hazard(seat, n * 2 // 3),
            Action.place_hazard(seat, n),
        ]

    def _generate_dismissals(self, state: GameState, seat: int) -> list[Action]:
        actions = []
        if state.foresight and state.foresight.seat == seat:
            actions.append(Action.dismiss_foresight(seat))
        if state.attack_notice and state.attack_notice.target == seat:
            actions.append(Action.dismiss_attack_notice(seat))
        return actions

    def _generate_card_plays(self, state: GameState, seat: int) -> list[Action]:
        """Play moves for every card in hand."""
        player = state.players[seat]
        targets = state.valid_targets(seat)
        actions: list[Action] = []
        pairs_added: set[tuple[str, int]] = set()

        for i, card in enumerate(player.hand):
            if card.kind in _SIMPLE_PLAYS:
                actions.append(_SIMPLE_PLAYS[card.kind](seat, i))

            elif card.kind == CardKind.FAVOR:
                for target in targets:
                    actions.append(Action.play_favor(seat, i, target))

            elif card.kind == CardKind.PAIR:
                actions.append(Action.play_single(seat, i))
                if len(player.matching_pairs(card.variant)) >= 2:
                    for target in targets:
                        key = (card.variant, target)
                        if key not in pairs_added:
                            pairs_added.add(key)
                            actions.append(Action.play_pair(seat, card.variant, target))

            # Shields are used automatically; hazards never sit in a hand

        return actions


def legal_actions(state: GameState, seat: int) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator()
    return generator.generate(state, seat)


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    if action.action_type == ActionType.WAIT_FOR_FAVOR:
        return False
    return action in legal_actions(state, action.seat)
