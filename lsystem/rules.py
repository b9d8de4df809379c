# lsystem/rules.py
"""
Grammar rewriting for L-systems.

A rule set is an ordered list of literal ``pattern -> replacement`` rules. One
call to ``RuleSet.apply`` performs a single left-to-right rewriting pass; the
first listed rule that matches at a position wins, and the characters it
consumed are dropped from the output. Repeated passes are driven by ``expand``.

Rules text format (one rule per line):
    A -> F[-A]F[-A]+FA
    F -> FF

Lines without a ``->`` separator (or with an empty pattern) are ignored.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

RULE_SEPARATOR = "->"


@dataclass(frozen=True)
class Rule:
    """
    A single literal rewriting rule.

    Attributes:
        pattern (str): Literal text matched at the current position
        replacement (str): Text emitted in place of the matched pattern

    Examples:
        >>> Rule.parse("F -> FF")
        Rule(pattern='F', replacement='FF')
        >>> str(Rule("A", "AB"))
        'A -> AB'
    """
    pattern: str
    replacement: str

    @classmethod
    def parse(cls, line: str) -> Optional["Rule"]:
        """
        Parses one ``pattern -> replacement`` line.

        Both sides are stripped of surrounding whitespace. Text after a second
        separator is ignored. Returns None for a line without a separator or
        with an empty pattern.
        """
        parts = line.split(RULE_SEPARATOR)
        if len(parts) < 2:
            return None
        pattern, replacement = parts[0].strip(), parts[1].strip()
        if not pattern:
            return None
        return cls(pattern, replacement)

    def __str__(self):
        return f"{self.pattern} {RULE_SEPARATOR} {self.replacement}"


@dataclass
class RuleSet:
    """
    Ordered collection of rules. List order is matching priority.

    Duplicate patterns are kept; the earlier one always wins. An empty rule set
    rewrites every string to itself.

    Examples:
        >>> rules = RuleSet.parse("A -> AB\\nB -> A")
        >>> rules.apply("ABA")
        'ABAAB'
    """
    rules: List[Rule] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "RuleSet":
        """Parses rules text line by line, skipping lines that are not rules."""
        rule_set = cls()
        for line in text.splitlines():
            rule = Rule.parse(line)
            if rule is not None:
                rule_set.rules.append(rule)
        return rule_set

    def push(self, pattern: str, replacement: str):
        self.rules.append(Rule(pattern, replacement))

    def apply(self, text: str) -> str:
        """
        Performs one rewriting pass over ``text``.

        The cursor walks one character at a time. ``skip`` counts the characters
        of the last match that still have to be consumed without output; the
        character at the match position itself is consumed by the normal
        cursor advance.

        Args:
            text: Input string

        Returns:
            The rewritten string
        """
        output = []
        skip = 0
        for i, char in enumerate(text):
            if skip > 0:
                skip -= 1
                continue
            for rule in self.rules:
                if text.startswith(rule.pattern, i):
                    output.append(rule.replacement)
                    skip = len(rule.pattern) - 1
                    break
            else:
                output.append(char)
        return "".join(output)

    def __len__(self):
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __getitem__(self, index: int) -> Rule:
        return self.rules[index]

    def __str__(self):
        return "\n".join(str(rule) for rule in self.rules)


def expand(axiom: str, rules: RuleSet, iterations: int) -> str:
    """
    Rewrites the axiom ``iterations`` times.

    Output length can grow geometrically with the iteration count; callers are
    responsible for keeping ``iterations`` within sane bounds.

    Examples:
        >>> expand("A", RuleSet.parse("A -> F[-A]F[-A]+FA"), 1)
        'F[-A]F[-A]+FA'
    """
    tree = axiom
    for _ in range(iterations):
        tree = rules.apply(tree)
    return tree


def parse_iterations(text) -> int:
    """Parses an iteration count, falling back to 0 for anything malformed or negative."""
    try:
        iterations = int(str(text).strip())
    except ValueError:
        return 0
    return max(iterations, 0)
