"""
Cross Stars CLI - Command-line interface for the engine.

Usage:
    crossstars validate <decklist>                 Dry-run a decklist
    crossstars start --p1 <file> --p2 <file>       Deal a game and print the board
    crossstars cards                               List catalog cards
    crossstars serve                               Run the HTTP API
"""

import argparse
import sys

from .api.schemas import GameStateResponse
from .api.service import APIService
from .catalog import JsonCatalog, default_catalog
from .decklist.parser import validate_decklist
from .engine_core.errors import CatalogUnavailable, DeckParseError
from .engine_core.rules import DEFAULT_RULES, POLICIES, GameRules
from .engine_core.setup import start_game


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Cross Stars - card game rules engine",
        prog="crossstars",
    )
    # Options shared by the game commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--catalog", help="Card catalog JSON (built-in sample cards if omitted)")
    common.add_argument("--policy", choices=sorted(POLICIES), help="Deck size policy")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", parents=[common], help="Validate a decklist")
    validate_parser.add_argument("decklist", help="Path to decklist text file")

    # Start command
    start_parser = subparsers.add_parser("start", parents=[common], help="Deal a game and print the board")
    start_parser.add_argument("--p1", required=True, help="Player 1 decklist file")
    start_parser.add_argument("--p2", required=True, help="Player 2 decklist file")
    start_parser.add_argument("--seed", type=int, help="Shuffle seed")

    # Cards command
    subparsers.add_parser("cards", parents=[common], help="List catalog cards")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    if args.command == "validate":
        return cmd_validate(args)
    elif args.command == "start":
        return cmd_start(args)
    elif args.command == "cards":
        return cmd_cards(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def _load_catalog(args):
    if args.catalog:
        try:
            return JsonCatalog.from_path(args.catalog)
        except (CatalogUnavailable, ValueError) as e:
            print(f"Error: {e}")
            sys.exit(1)
    return default_catalog()


def _rules(args) -> GameRules:
    if args.policy:
        return GameRules(deck_policy=POLICIES[args.policy])
    return DEFAULT_RULES


def _read(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {path}")
        sys.exit(1)


def cmd_validate(args):
    """Validate a decklist."""
    catalog = _load_catalog(args)
    result = validate_decklist(_read(args.decklist), catalog, _rules(args).deck_policy)

    if result.counts:
        print(
            f"Leaders: {result.counts['leaders']}  "
            f"Tactics: {result.counts['tactics']}  "
            f"Main deck: {result.counts['main_deck']}"
        )
    if result.valid:
        print("Decklist is valid")
        return 0

    print("\nErrors:")
    for error in result.errors:
        print(f"  - {error}")
    return 1


def cmd_start(args):
    """Deal a game and print the opening board."""
    catalog = _load_catalog(args)
    rules = _rules(args)
    try:
        state = start_game(_read(args.p1), _read(args.p2), catalog, rules=rules, seed=args.seed)
    except (DeckParseError, CatalogUnavailable) as e:
        print(f"Error: {e}")
        return 1

    service = APIService(catalog=catalog, rules=rules)
    print(render_board(service.build_game_state(state)))
    return 0


def cmd_cards(args):
    """List catalog cards."""
    catalog = _load_catalog(args)
    for name in catalog.names():
        card = catalog.lookup(name)
        print(f"{card.card_id:<10} {card.card_type:<8} cost {card.cost}  {card.name}")
    return 0


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("crossstars.api.app:serve_app", factory=True, host=args.host, port=args.port)
    return 0


def render_board(snapshot: GameStateResponse) -> str:
    """Plain-text board for terminals."""
    lines = [
        f"Game {snapshot.game_id}  Round {snapshot.round}  Turn {snapshot.turn}  "
        f"Phase {snapshot.phase}  Active: {snapshot.active_player}",
    ]
    for player in snapshot.players:
        marker = "*" if player.is_active else " "
        ticket = "  [PP ticket]" if player.pp_ticket else ""
        lines.append("")
        lines.append(f"{marker} {player.player_id}  PP {player.pp.current}/{player.pp.max}{ticket}")
        for zone in player.zones:
            if not zone.cards:
                lines.append(f"    {zone.zone:<16} ({zone.card_count})")
                continue
            names = []
            for card in zone.cards:
                label = card.name
                if card.current_hp is not None:
                    label += f" HP{card.current_hp}/{card.max_hp}"
                if card.is_tapped:
                    label += " (down)"
                if card.is_awakened:
                    label += " (awakened)"
                names.append(label)
            lines.append(f"    {zone.zone:<16} ({zone.card_count}) " + ", ".join(names))
    return "\n".join(lines)


if __name__ == "__main__":
    sys.exit(main())
