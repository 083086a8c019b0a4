from __future__ import annotations

import argparse
import logging
from typing import Callable

from commit_reveal import KEY_BYTES, EntropySourceError, KeyGenerator, canonical_message, commitment_message, verify_commitment
from fair_round import Round, RoundResult
from move_table import format_dominance_table, format_move_list
from rules import InvalidMoveSetError, InvalidSelectionError, RuleEngine, parse_selection

EXIT_CHOICE = "0"
HELP_CHOICE = "?"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="hmac-rps")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play against the computer with a provably fair move")
    play.add_argument("moves", nargs="*", help="Odd number (>= 3) of distinct moves, e.g. Rock Paper Scissors")
    play.add_argument("--move", type=int, default=None, help="1-based move to play once (if not provided, will prompt)")
    play.add_argument("--key-bytes", type=int, default=KEY_BYTES, help=f"Secret key length in bytes (>= {KEY_BYTES})")

    verify = sub.add_parser("verify", help="Check a disclosed key against the HMAC shown after a round")
    verify.add_argument("--key", required=True, help="Disclosed HMAC key (hex)")
    verify.add_argument("--hmac", required=True, help="HMAC shown after the round")
    verify.add_argument("--user-move", required=True)
    verify.add_argument("--computer-move", required=True)
    verify.add_argument("--commitment", default=None, help="Commitment shown before the round, if recorded")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "verify":
        return _verify(args)

    try:
        rules = RuleEngine(args.moves)
    except InvalidMoveSetError as exc:
        logger.debug("rejected move set (%s)", exc.reason)
        raise SystemExit(str(exc))

    try:
        key_generator = KeyGenerator(args.key_bytes)
    except ValueError as exc:
        raise SystemExit(f"--key-bytes: {exc}")

    try:
        if args.move is not None:
            try:
                visible_index = parse_selection(str(args.move), len(rules))
            except InvalidSelectionError as exc:
                raise SystemExit(f"--move: {exc}")
            round_ = Round.start(rules, key_generator)
            print(f"Commitment: {round_.commitment}")
            _show_result(round_.play(visible_index))
            return 0
        return run_session(rules, key_generator=key_generator)
    except EntropySourceError as exc:
        logger.error("aborting: %s", exc)
        raise SystemExit(f"Cannot start a fair round: {exc}")


def run_session(
    rules: RuleEngine,
    *,
    key_generator: KeyGenerator | None = None,
    input_fn: Callable[[str], str] = input,
) -> int:
    """Prompt loop: one round per valid choice, until the user exits."""
    round_: Round | None = None
    while True:
        if round_ is None or round_.played:
            round_ = Round.start(rules, key_generator)

        print(f"Commitment: {round_.commitment}")
        print(f"Available moves:\n{format_move_list(rules.moves)}\n{EXIT_CHOICE} - exit\n{HELP_CHOICE} - help")
        try:
            choice = input_fn("Enter your move: ").strip()
        except EOFError:
            choice = EXIT_CHOICE

        if choice == EXIT_CHOICE:
            print("See you!")
            return 0
        if choice == HELP_CHOICE:
            print(format_dominance_table(rules))
            continue

        try:
            visible_index = parse_selection(choice, len(rules))
        except InvalidSelectionError as exc:
            print(f"❌ {exc}")
            continue

        _show_result(round_.play(visible_index))


def _show_result(result: RoundResult) -> None:
    print(f"Your move: {result.visible_move}")
    print(f"Computer move: {result.hidden_move}")
    if result.outcome == "win":
        print("🎉 You win!")
    elif result.outcome == "lose":
        print("😞 You lose!")
    else:
        print("🤝 Draw!")
    print(f"HMAC: {result.hmac}")
    print(f"HMAC key: {result.key}")


def _verify(args: argparse.Namespace) -> int:
    key = args.key.strip()
    if not key:
        raise SystemExit("--key must not be empty")
    message = canonical_message(visible_move=args.user_move, hidden_move=args.computer_move)
    ok = verify_commitment(key=key, message=message, expected=args.hmac)
    if ok and args.commitment is not None:
        ok = verify_commitment(
            key=key,
            message=commitment_message(hidden_move=args.computer_move),
            expected=args.commitment,
        )

    if ok:
        print(f"✅ HMAC matches: the computer played {args.computer_move}")
        return 0
    print("❌ HMAC does not match the disclosed key and moves")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
