"""
Kaboom CLI - Command-line interface for the engine.

Usage:
    kaboom play [--seed N] [--delay]         Play in the terminal
    kaboom simulate [--games N] [--seed N]   Random-vs-random games
    kaboom serve [--host H] [--port P]       Run the HTTP API with uvicorn
"""

from __future__ import annotations
import argparse
import logging
import random
import sys
import time
from collections import Counter

from .bots import RandomPolicy, personality_for
from .engine_core.action import ActionResult
from .engine_core.state import HUMAN_SEAT, DEFAULT_PLAYER_NAMES
from .session import Session, SessionState

logger = logging.getLogger(__name__)

# Human moves per simulated game before giving up on it
SIMULATION_MOVE_CAP = 1000


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Kaboom - Exploding Kittens against the computer",
        prog="kaboom",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument(
        "--delay", action="store_true", help="Pause while computer players think"
    )

    simulate_parser = subparsers.add_parser("simulate", help="Play random games and report winners")
    simulate_parser.add_argument("--games", type=int, default=100, help="Number of games")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Seed of the first game")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


# =============================================================================
# play
# =============================================================================

def cmd_play(args):
    """Interactive game against three computer players."""
    delay_hook = None
    if args.delay:
        def delay_hook(seat, seconds):
            print(f"  {personality_for(seat).title} is thinking...")
            time.sleep(seconds)

    session = Session(seed=args.seed, delay_hook=delay_hook)
    print("=" * 60)
    print("KABOOM - don't draw the Exploding Kitten")
    print("=" * 60)

    while True:
        print()
        print(render_view(session))
        show_notices(session)

        status = session.status
        if status == SessionState.GAME_OVER:
            answer = input("Play again? [y/N] ").strip().lower()
            if answer != "y":
                return
            session.new_game()
            continue

        line = input(prompt_for(status)).strip()
        if line in ("q", "quit"):
            return
        if line in ("h", "help"):
            print(HELP_TEXT)
            continue
        result = handle_input(session, status, line)
        if result is None:
            print("  Didn't understand that. Type 'h' for help.")
            continue
        report(session, result)


def prompt_for(status: SessionState) -> str:
    if status == SessionState.PLACE_HAZARD:
        return "Where does the Exploding Kitten go? (0 = top) > "
    if status == SessionState.GIVE_FAVOR:
        return "Which card do you give? > "
    return "(d)raw, (p)lay <card> [target], (h)elp, (q)uit > "


def handle_input(session: Session, status: SessionState, line: str):
    """Turn one line of input into a move. None if the line is not understood."""
    words = line.split()
    if not words:
        return None

    try:
        if status == SessionState.PLACE_HAZARD:
            return session.place_hazard(int(words[0]))
        if status == SessionState.GIVE_FAVOR:
            return session.resolve_favor(int(words[0]))

        command = words[0].lower()
        if command in ("d", "draw"):
            return session.draw()
        if command in ("p", "play") and len(words) >= 2:
            target = int(words[2]) if len(words) >= 3 else None
            return session.play_card(int(words[1]), target)
    except ValueError:
        return None
    return None


HELP_TEXT = """
  d              draw the top card and end your turn
  p 2            play card 2 from your hand
  p 2 1          play Favor (or a cat pair) at seat 1
  q              quit
"""


def render_view(session: Session) -> str:
    """What the human can see: own hand, other hand sizes, pile sizes."""
    state = session.state
    lines = [f"Turn {state.turn_number} - draw pile: {len(state.draw_pile)} cards"]
    if state.discard_pile:
        lines.append(f"Top of discard: {state.discard_pile[-1].name}")

    for seat, player in sorted(state.players.items()):
        marker = ">" if seat == state.current_seat and not state.game_over else " "
        if player.eliminated:
            detail = "exploded"
        else:
            detail = f"{len(player.hand)} cards, owes {state.turns_owed[seat]} turn(s)"
        lines.append(f" {marker} [{seat}] {player.name}: {detail}")

    human = state.players[HUMAN_SEAT]
    lines.append("Your hand:")
    for i, card in enumerate(human.hand):
        lines.append(f"   {i}: {card.name}")
    return "\n".join(lines)


def show_notices(session: Session) -> None:
    """Print and acknowledge the foresight reveal, attack notice, and result."""
    state = session.state
    if state.foresight and state.foresight.seat == HUMAN_SEAT:
        top = ", ".join(card.name for card in state.foresight.cards) or "nothing"
        print(f"  The future (top first): {top}")
        session.dismiss_foresight()

    if state.attack_notice and state.attack_notice.target == HUMAN_SEAT:
        attacker = state.players[state.attack_notice.attacker].name
        print(f"  {attacker} attacked you! You owe {state.attack_notice.turns_owed} turns.")
        session.dismiss_attack_notice()

    if state.game_over:
        winner = state.game_over.winner
        if winner == HUMAN_SEAT:
            print("  You win!")
        elif winner is not None:
            print(f"  {state.players[winner].name} wins.")
        else:
            print("  Nobody survived.")


def report(session: Session, result: ActionResult) -> None:
    if not result.success:
        print(f"  {result.error}")
        return
    for change in result.state_changes:
        print(f"  {change}")
    if result.card is not None:
        print(f"  Card: {result.card.name}")
    if session.last_turn:
        for change in session.last_turn.changes:
            print(f"  {change}")


# =============================================================================
# simulate
# =============================================================================

def simulate(games: int, seed: int | None = None) -> Counter:
    """
    Play games with a random policy in the human seat as well.

    Returns a Counter of winning seats (None for an abandoned game).
    """
    winners: Counter = Counter()
    for i in range(games):
        game_seed = seed + i if seed is not None else None
        session = Session(seed=game_seed)
        human = RandomPolicy(rng=random.Random(game_seed))

        for _ in range(SIMULATION_MOVE_CAP):
            if session.state.game_over:
                break
            legal = session.legal_moves()
            if not legal:
                break
            session.submit(human.select_action(session.state, legal).action)

        over = session.state.game_over
        winners[over.winner if over else None] += 1
        if not over:
            logger.warning("Game %d (seed %s) did not finish", i, game_seed)
    return winners


def cmd_simulate(args):
    """Random-vs-random games."""
    winners = simulate(args.games, args.seed)
    print(f"Played {args.games} games")
    for seat, count in sorted(winners.items(), key=lambda kv: (kv[0] is None, kv[0])):
        label = DEFAULT_PLAYER_NAMES[seat] if seat is not None else "unfinished"
        print(f"  {label:10s} {count:5d}  ({100.0 * count / max(args.games, 1):.1f}%)")


# =============================================================================
# serve
# =============================================================================

def cmd_serve(args):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("kaboom.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
