"""Terminal front end: human plays White, the engine answers as Black."""

import sys

from parlour.config import setup_logging
from parlour.core.pieces import Position
from parlour.main import Game, GameMode

HELP = "commands: e2e4 | undo | new | moves | mode local|ai | level 1|2|3 | fen | quit"


def parse_move(text: str):
    if len(text) != 4:
        raise ValueError(f"expected a move like e2e4, got {text!r}")
    return Position.parse(text[:2]), Position.parse(text[2:])


def handle(game: Game, line: str, out=sys.stdout) -> bool:
    """Run one command. Returns False when the session should end."""
    words = line.split()
    if not words:
        return True
    cmd = words[0].lower()

    if cmd == "quit":
        return False
    if cmd == "help":
        print(HELP, file=out)
    elif cmd == "new":
        game.reset()
    elif cmd == "undo":
        game.undo()
        # In AI mode take back our own move too, not just the engine's reply.
        if game.is_ai_turn():
            game.undo()
    elif cmd == "moves":
        for number, text in enumerate(game.move_list(), start=1):
            print(f"{number}. {text}", file=out)
    elif cmd == "fen":
        print(game.get_fen(), file=out)
    elif cmd == "mode" and len(words) == 2:
        try:
            game.set_mode(GameMode(words[1]))
        except ValueError:
            print("mode must be local or ai", file=out)
    elif cmd == "level" and len(words) == 2:
        try:
            game.set_difficulty(int(words[1]))
            print(f"Difficulty: {game.difficulty_name}", file=out)
        except ValueError as e:
            print(e, file=out)
    else:
        try:
            from_sq, to_sq = parse_move(cmd)
        except ValueError as e:
            print(f"{e}; {HELP}", file=out)
            return True
        if not game.play(from_sq, to_sq):
            print("Illegal move, try again.", file=out)
            return True
        if game.is_ai_turn():
            reply = game.ai_move()
            if reply.is_null:
                print("Engine has no legal move.", file=out)
            else:
                print(f"Engine plays: {reply}", file=out)
    return True


def main(argv=None):
    setup_logging()
    game = Game()
    print(HELP)
    while True:
        print(game.board.unicode())
        print(f"{game.side_to_move().value} to move ({game.mode.value}, {game.difficulty_name})")
        try:
            line = input("> ")
        except EOFError:
            break
        if not handle(game, line):
            break
    print("Game Over")


if __name__ == "__main__":
    main()
