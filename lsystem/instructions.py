# lsystem/instructions.py
"""
Turtle instructions and the symbol -> instruction table.

The instruction vocabulary is closed:
- forward <length>: draw a branch segment
- turn <degrees>: rotate the heading
- scale <factor>: scale subsequent segment lengths of the current branch
- push / pop: save and restore the turtle state

Instructions text format (one mapping per line):
    F = forward 10
    + = turn 25
    - = turn -25
    [ = push
    ] = pop

A line whose second token is not ``=``, whose command is unknown, or whose
numeric argument is missing or malformed is ignored.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

PUSH_SYMBOL = "["
POP_SYMBOL = "]"


## --- Instruction Variants ---
@dataclass(frozen=True)
class Forward:
    length: float

    def __str__(self):
        return f"forward {self.length}"


@dataclass(frozen=True)
class Turn:
    angle: float  # degrees

    def __str__(self):
        return f"turn {self.angle}"


@dataclass(frozen=True)
class Scale:
    factor: float

    def __str__(self):
        return f"scale {self.factor}"


@dataclass(frozen=True)
class Push:
    def __str__(self):
        return "push"


@dataclass(frozen=True)
class Pop:
    def __str__(self):
        return "pop"


Instruction = Union[Forward, Turn, Scale, Push, Pop]

_NUMERIC_COMMANDS = {"forward": Forward, "turn": Turn, "scale": Scale}
_BARE_COMMANDS = {"push": Push, "pop": Pop}


## --- Parsing ---
def _parse_float(token: str) -> Optional[float]:
    try:
        return float(token)
    except ValueError:
        return None


def parse_command(tokens: Sequence[str]) -> Optional[Instruction]:
    """
    Converts ``<command> [<arg>]`` tokens into an Instruction.

    Tokens beyond the ones a command needs are ignored.

    Examples:
        >>> parse_command(["forward", "10"])
        Forward(length=10.0)
        >>> parse_command(["push"])
        Push()
        >>> parse_command(["turn"]) is None
        True
    """
    if not tokens:
        return None
    name, args = tokens[0], tokens[1:]
    if name in _BARE_COMMANDS:
        return _BARE_COMMANDS[name]()
    if name in _NUMERIC_COMMANDS and args:
        value = _parse_float(args[0])
        if value is not None:
            return _NUMERIC_COMMANDS[name](value)
    return None


def parse_instruction(line: str) -> Optional[Tuple[str, Instruction]]:
    """
    Parses one ``<symbol> = <command> [<args>]`` line.

    The symbol is the first character of the first whitespace-separated token.

    Returns:
        (symbol, instruction) tuple, or None if the line is malformed
    """
    tokens = line.split()
    if len(tokens) < 3 or tokens[1] != "=":
        return None
    instruction = parse_command(tokens[2:])
    if instruction is None:
        return None
    return tokens[0][0], instruction


## --- Instruction Table ---
class InstructionSet:
    """
    Mapping from single symbols to instructions.

    Inserting a symbol twice keeps the last instruction. Symbols without a
    mapping are skipped by ``apply``, so helper symbols used only by the
    rewriting rules never reach the mesh builder.

    Examples:
        >>> table = InstructionSet.parse("F = forward 10\\n[ = push\\n] = pop")
        >>> table.apply("F[F]X")
        [Forward(length=10.0), Push(), Forward(length=10.0), Pop()]
    """
    def __init__(self, instructions: Optional[Dict[str, Instruction]] = None):
        self.instructions: Dict[str, Instruction] = {}
        for symbol, instruction in (instructions or {}).items():
            self.insert(symbol, instruction)

    @classmethod
    def parse(cls, text: str) -> "InstructionSet":
        """Parses instructions text, skipping malformed lines."""
        table = cls()
        for line in text.splitlines():
            parsed = parse_instruction(line)
            if parsed is not None:
                table.insert(*parsed)
        return table

    def insert(self, symbol: str, instruction: Instruction):
        if len(symbol) != 1:
            raise ValueError(f"Instruction symbol must be a single character, got {symbol!r}")
        self.instructions[symbol] = instruction

    def with_branching(self) -> "InstructionSet":
        """Returns a copy with ``[`` bound to push and ``]`` bound to pop, overriding any user mapping."""
        table = InstructionSet(self.instructions)
        table.insert(PUSH_SYMBOL, Push())
        table.insert(POP_SYMBOL, Pop())
        return table

    def get(self, symbol: str) -> Optional[Instruction]:
        return self.instructions.get(symbol)

    def apply(self, symbols: str) -> List[Instruction]:
        """Translates a symbol string into the instruction sequence, dropping unmapped symbols."""
        return [self.instructions[c] for c in symbols if c in self.instructions]

    def __contains__(self, symbol):
        return symbol in self.instructions

    def __len__(self):
        return len(self.instructions)

    def __eq__(self, other):
        if not isinstance(other, InstructionSet):
            return NotImplemented
        return self.instructions == other.instructions

    def __repr__(self):
        return f"InstructionSet({self.instructions!r})"

    def __str__(self):
        return "\n".join(f"{symbol} = {instruction}" for symbol, instruction in self.instructions.items())
