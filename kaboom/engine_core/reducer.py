"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- (state, action) -> new state; the input state is never touched
- Validates turn order and pending decisions before dispatch
- Handlers raise InvalidMove for rule violations; apply() turns that
  into a failed ActionResult
- One injected random source for shuffles and random steals
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field

from .action import Action, ActionType, ActionResult, ErrorCode, Outcome
from .cards import Card, CardKind
from .errors import InvalidMove, DeckExhaustedError
from .shuffler import shuffle
from .state import (
    GameState,
    Player,
    PendingPlacement,
    PendingFavor,
    ForesightReveal,
    AttackNotice,
    GameOver,
)

logger = logging.getLogger(__name__)

FORESIGHT_DEPTH = 3
WIN_REASON = "last seat standing"


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the random source - all game state is in GameState.
    """
    rng: random.Random = field(default_factory=random.Random)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state or an error.
        Raises DeckExhaustedError if a draw hits an empty pile.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            message, code = rejection
            logger.debug("Rejected %s by seat %s: %s", action.describe(), action.seat, message)
            return ActionResult.failure(message, error_code=code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )

        new_state = state.clone()
        try:
            result = handler(new_state, action)
        except InvalidMove as e:
            logger.debug("Rejected %s by seat %s: %s", action.describe(), action.seat, e)
            return ActionResult.failure(str(e), error_code=e.code)

        new_state.action_history.append(action)
        logger.debug("Seat %s: %s -> %s", action.seat, action.describe(), result.outcome)
        return result

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, ErrorCode] | None:
        """
        Check who may act right now.

        Returns (message, code) if the seat may not make this move,
        None otherwise. Card-level checks happen in the handlers.
        """
        seat = action.payload.seat
        action_type = action.action_type

        if state.game_over:
            return "Game is over - no moves allowed", ErrorCode.GAME_OVER

        player = state.get_player(seat)
        if player is None:
            return f"No player at seat {seat}", ErrorCode.OUT_OF_TURN
        if player.eliminated:
            return f"{player.name} has been eliminated", ErrorCode.OUT_OF_TURN

        # Acknowledgements are allowed off-turn
        if action_type == ActionType.DISMISS_FORESIGHT:
            if not state.foresight or state.foresight.seat != seat:
                return "No future to dismiss", ErrorCode.OUT_OF_TURN
            return None
        if action_type == ActionType.DISMISS_ATTACK_NOTICE:
            if not state.attack_notice or state.attack_notice.target != seat:
                return "No attack notice to dismiss", ErrorCode.OUT_OF_TURN
            return None

        favor = state.pending_favor
        if action_type == ActionType.RESOLVE_FAVOR:
            if not favor or favor.giver != seat:
                return f"No favor is waiting on {player.name}", ErrorCode.OUT_OF_TURN
            return None
        if favor:
            if seat in (favor.requester, favor.giver):
                return "Waiting for a favor to be resolved", ErrorCode.BLOCKED_BY_PENDING
            return f"Not {player.name}'s turn", ErrorCode.OUT_OF_TURN

        placement = state.pending_placement
        if action_type == ActionType.PLACE_HAZARD:
            if not placement or placement.owner != seat:
                return f"{player.name} has no hazard to place", ErrorCode.OUT_OF_TURN
            return None
        if placement:
            if seat == placement.owner:
                return "Place the Exploding Kitten first", ErrorCode.BLOCKED_BY_PENDING
            return f"Not {player.name}'s turn", ErrorCode.OUT_OF_TURN

        if seat != state.current_seat:
            return f"Not {player.name}'s turn", ErrorCode.OUT_OF_TURN

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.DRAW: self._handle_draw,
            ActionType.PLACE_HAZARD: self._handle_place_hazard,
            ActionType.PLAY_SKIP: self._handle_skip,
            ActionType.PLAY_ATTACK: self._handle_attack,
            ActionType.PLAY_SHUFFLE: self._handle_shuffle,
            ActionType.PLAY_FORESIGHT: self._handle_foresight,
            ActionType.PLAY_FAVOR: self._handle_favor,
            ActionType.PLAY_PAIR: self._handle_pair,
            ActionType.PLAY_SINGLE: self._handle_single,
            ActionType.RESOLVE_FAVOR: self._handle_resolve_favor,
            ActionType.DISMISS_FORESIGHT: self._handle_dismiss_foresight,
            ActionType.DISMISS_ATTACK_NOTICE: self._handle_dismiss_attack_notice,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Draw & hazard placement
    # =========================================================================

    def _handle_draw(self, state: GameState, action: Action) -> ActionResult:
        """Handle draw: normal card, defused hazard, or elimination."""
        seat = action.seat
        player = state.players[seat]

        if not state.draw_pile:
            logger.error("Seat %d asked to draw from an empty draw pile", seat)
            raise DeckExhaustedError(f"Draw pile is empty (seat {seat}, turn {state.turn_number})")

        card = state.draw_pile.pop()

        if card.kind != CardKind.HAZARD:
            player.hand.append(card)
            self._resolve_draw_cycle(state, seat)
            return ActionResult.success_with_state(
                state,
                outcome=Outcome.DRAWN,
                changes=[f"{player.name} drew a card"],
                card=card,
            )

        shield_index = player.find(CardKind.SHIELD)
        if shield_index is not None:
            shield = player.hand.pop(shield_index)
            state.discard_pile.append(shield)
            state.pending_placement = PendingPlacement(card=card, owner=seat)
            logger.info("%s defused an Exploding Kitten", player.name)
            return ActionResult.success_with_state(
                state,
                outcome=Outcome.DEFUSED,
                changes=[f"{player.name} drew an Exploding Kitten and defused it"],
                card=card,
            )

        # No shield: out of the game. The hazard stays in the discard pile.
        player.eliminated = True
        state.discard_pile.append(card)
        state.turns_owed[seat] = 1
        if state.foresight and state.foresight.seat == seat:
            state.foresight = None
        if state.attack_notice and state.attack_notice.target == seat:
            state.attack_notice = None
        self._pass_turn(state, seat)
        self._check_game_over(state)
        logger.info("%s exploded", player.name)

        changes = [f"{player.name} drew an Exploding Kitten and exploded"]
        if state.game_over and state.game_over.winner is not None:
            changes.append(f"{state.players[state.game_over.winner].name} wins")
        return ActionResult.success_with_state(
            state,
            outcome=Outcome.ELIMINATED,
            changes=changes,
            card=card,
        )

    def _handle_place_hazard(self, state: GameState, action: Action) -> ActionResult:
        """
        Put a defused hazard back in the draw pile.

        position counts from the top: 0 is the next card drawn,
        len(draw_pile) is the very bottom.
        """
        seat = action.seat
        player = state.players[seat]
        position = action.payload.position

        if position is None or not 0 <= position <= len(state.draw_pile):
            raise InvalidMove(
                f"Position must be between 0 and {len(state.draw_pile)}",
                ErrorCode.ILLEGAL_POSITION,
            )

        card = state.pending_placement.card
        state.draw_pile.insert(len(state.draw_pile) - position, card)
        state.pending_placement = None
        self._resolve_draw_cycle(state, seat)

        return ActionResult.success_with_state(
            state,
            outcome=Outcome.PLACED,
            changes=[f"{player.name} put the Exploding Kitten back in the deck"],
        )

    # =========================================================================
    # Action cards
    # =========================================================================

    def _handle_skip(self, state: GameState, action: Action) -> ActionResult:
        """Skip: one draw-cycle resolved without drawing."""
        seat = action.seat
        player = state.players[seat]
        self._discard_from_hand(state, player, action.payload.card_index, CardKind.SKIP)
        self._resolve_draw_cycle(state, seat)
        return ActionResult.success_with_state(
            state,
            outcome=Outcome.SKIPPED,
            changes=[f"{player.name} played Skip"],
        )

    def _handle_attack(self, state: GameState, action: Action) -> ActionResult:
        """
        Attack: end this seat's turns and give the next seat one more.

        Attacks stack - the target's owed turns are incremented, not set.
        """
        seat = action.seat
        player = state.players[seat]
        self._discard_from_hand(state, player, action.payload.card_index, CardKind.ATTACK)

        target = state.next_alive_seat(seat)
        state.turns_owed[target] += 1
        state.turns_owed[seat] = 1
        self._pass_turn(state, seat)

        target_player = state.players[target]
        if target_player.is_human:
            state.attack_notice = AttackNotice(
                attacker=seat,
                target=target,
                turns_owed=state.turns_owed[target],
            )

        return ActionResult.success_with_state(
            state,
            outcome=Outcome.ATTACKED,
            changes=[
                f"{player.name} attacked {target_player.name}, "
                f"who now owes {state.turns_owed[target]} turns"
            ],
        )

    def _handle_shuffle(self, state: GameState, action: Action) -> ActionResult:
        """Shuffle the draw pile in place. Turn continues."""
        player = state.players[action.seat]
        self._discard_from_hand(state, player, action.payload.card_index, CardKind.SHUFFLE)
        shuffle(state.draw_pile, self.rng)
        return ActionResult.success_with_state(
            state,
            outcome=Outcome.SHUFFLED,
            changes=[f"{player.name} shuffled the deck"],
        )

    def _handle_foresight(self, state: GameState, action: Action) -> ActionResult:
        """
        See the top of the deck.

        Only the human seat gets a reveal; computer seats gain nothing.
        """
        seat = action.seat
        player = state.players[seat]
        self._discard_from_hand(state, player, action.payload.card_index, CardKind.FORESIGHT)
        if player.is_human:
            state.foresight = ForesightReveal(seat=seat, cards=state.peek(FORESIGHT_DEPTH))
        return ActionResult.success_with_state(
            state,
            outcome=Outcome.FORESIGHT,
            changes=[f"{player.name} saw the future"],
        )

    def _handle_favor(self, state: GameState, action: Action) -> ActionResult:
        """
        Favor: the target hands over a card.

        A computer target gives a random card at once. The human target
        chooses, so the exchange is left pending.
        """
        seat = action.seat
        player = state.players[seat]
        target_seat = action.payload.target_seat

        self._check_card(player, action.payload.card_index, CardKind.FAVOR)
        target = self._check_target(state, seat, target_seat)
        self._discard_from_hand(state, player, action.payload.card_index, CardKind.FAVOR)

        if target.is_human:
            state.pending_favor = PendingFavor(requester=seat, giver=target_seat)
            return ActionResult.success_with_state(
                state,
                outcome=Outcome.FAVOR_PENDING,
                changes=[f"{player.name} asked {target.name} for a favor"],
            )

        given = self._take_random(target)
        player.hand.append(given)
        return ActionResult.success_with_state(
            state,
            outcome=Outcome.FAVOR_RECEIVED,
            changes=[f"{target.name} gave {player.name} a card"],
            card=given,
        )

    def _handle_resolve_favor(self, state: GameState, action: Action) -> ActionResult:
        """The giver hands the chosen card to the requester."""
        favor = state.pending_favor
        giver = state.players[favor.giver]
        requester = state.players[favor.requester]

        index = action.payload.card_index
        if index is None or not 0 <= index < len(giver.hand):
            raise InvalidMove(f"No card at index {index}", ErrorCode.ILLEGAL_CARD_INDEX)

        card = giver.hand.pop(index)
        requester.hand.append(card)
        state.pending_favor = None

        return ActionResult.success_with_state(
            state,
            outcome=Outcome.FAVOR_RESOLVED,
            changes=[f"{giver.name} gave {requester.name} a card"],
            card=card,
        )

    def _handle_pair(self, state: GameState, action: Action) -> ActionResult:
        """Two matching cat cards steal a random card from the target."""
        seat = action.seat
        player = state.players[seat]
        variant = action.payload.variant
        target_seat = action.payload.target_seat

        matches = player.matching_pairs(variant) if variant else []
        if len(matches) < 2:
            raise InvalidMove(
                f"Need two {variant or 'matching'} cards to play a pair",
                ErrorCode.INSUFFICIENT_MATCH,
            )
        target = self._check_target(state, seat, target_seat)

        first, second = matches[0], matches[1]
        second_card = player.hand.pop(second)
        first_card = player.hand.pop(first)
        state.discard_pile.append(first_card)
        state.discard_pile.append(second_card)

        stolen = self._take_random(target)
        player.hand.append(stolen)

        return ActionResult.success_with_state(
            state,
            outcome=Outcome.STOLEN,
            changes=[f"{player.name} played a {variant} pair and stole a card from {target.name}"],
            card=stolen,
        )

    def _handle_single(self, state: GameState, action: Action) -> ActionResult:
        """A lone cat card is just discarded."""
        player = state.players[action.seat]
        card = self._discard_from_hand(state, player, action.payload.card_index, CardKind.PAIR)
        return ActionResult.success_with_state(
            state,
            outcome=Outcome.DISCARDED,
            changes=[f"{player.name} discarded {card.name}"],
        )

    def _handle_dismiss_foresight(self, state: GameState, action: Action) -> ActionResult:
        state.foresight = None
        return ActionResult.success_with_state(state, outcome=Outcome.DISMISSED)

    def _handle_dismiss_attack_notice(self, state: GameState, action: Action) -> ActionResult:
        state.attack_notice = None
        return ActionResult.success_with_state(state, outcome=Outcome.DISMISSED)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _check_card(self, player: Player, index: int | None, kind: CardKind) -> Card:
        """Validate that hand[index] exists and is of the expected kind."""
        if index is None or not 0 <= index < len(player.hand):
            raise InvalidMove(f"No card at index {index}", ErrorCode.ILLEGAL_CARD_INDEX)
        card = player.hand[index]
        if card.kind != kind:
            raise InvalidMove(
                f"{card.name} cannot be played as {kind.value}",
                ErrorCode.UNPLAYABLE_CARD,
            )
        return card

    def _discard_from_hand(
        self, state: GameState, player: Player, index: int | None, kind: CardKind
    ) -> Card:
        """Move hand[index] to the discard pile after validating it."""
        self._check_card(player, index, kind)
        card = player.hand.pop(index)
        state.discard_pile.append(card)
        return card

    def _check_target(self, state: GameState, seat: int, target_seat: int | None) -> Player:
        """Target must be another live seat with at least one card."""
        if target_seat is None or target_seat not in state.valid_targets(seat):
            raise InvalidMove(f"Seat {target_seat} cannot be targeted", ErrorCode.ILLEGAL_TARGET)
        return state.players[target_seat]

    def _take_random(self, player: Player) -> Card:
        """Remove a uniformly random card from a hand."""
        return player.hand.pop(self.rng.randrange(len(player.hand)))

    def _resolve_draw_cycle(self, state: GameState, seat: int) -> bool:
        """
        Count one draw (or draw-equivalent) against the seat.

        Returns True if that finished the seat's turns and play passed on.
        """
        state.turns_owed[seat] -= 1
        if state.turns_owed[seat] <= 0:
            state.turns_owed[seat] = 1
            self._pass_turn(state, seat)
            return True
        return False

    def _pass_turn(self, state: GameState, from_seat: int) -> None:
        """Give the turn to the next live seat."""
        state.current_seat = state.next_alive_seat(from_seat)
        state.turn_number += 1

    def _check_game_over(self, state: GameState) -> None:
        """End the game once at most one seat survives."""
        alive = state.alive_seats()
        if len(alive) > 1:
            return
        winner = alive[0] if alive else None
        state.game_over = GameOver(winner=winner, reason=WIN_REASON)
        if winner is not None:
            state.current_seat = winner
            logger.info("Game over: %s wins", state.players[winner].name)
        else:
            logger.info("Game over: no survivors")


def apply_action(state: GameState, action: Action, rng: random.Random | None = None) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(rng=rng or random.Random())
    return reducer.apply(state, action)
