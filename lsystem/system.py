# lsystem/system.py
"""
End-to-end L-system configuration and generation.

``LSystem`` keeps the raw text a front-end edits (axiom, rules, instructions,
iteration count) and turns it into a display-ready mesh:

    axiom --RuleSet.apply x N--> symbols --InstructionSet.apply--> instructions
          --TurtleMeshBuilder--> mesh --fit_mesh--> display coordinates

Setters regenerate only when the parsed value actually changes, so edits that
add whitespace or a malformed line do not trigger a rebuild.
"""
from dataclasses import dataclass, field
from typing import Optional

from .instructions import InstructionSet
from .mesh import Mesh, SystemOptions, fit_mesh, generate_mesh
from .presets import DEFAULT_PRESET, PRESETS
from .rules import RuleSet, expand, parse_iterations

DISPLAY_SIZE = 450.0
DEFAULT_ITERATIONS = 7


@dataclass
class LSystem:
    axiom: str = PRESETS[DEFAULT_PRESET]["axiom"]
    rules_text: str = PRESETS[DEFAULT_PRESET]["rules"]
    instructions_text: str = PRESETS[DEFAULT_PRESET]["instructions"]
    iterations_text: str = str(DEFAULT_ITERATIONS)
    options: SystemOptions = field(default_factory=SystemOptions)
    display_size: float = DISPLAY_SIZE
    mesh: Optional[Mesh] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_preset(cls, name: str, **kwargs) -> "LSystem":
        if name not in PRESETS:
            raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(sorted(PRESETS))}")
        preset = PRESETS[name]
        return cls(
            axiom=preset["axiom"],
            rules_text=preset["rules"],
            instructions_text=preset["instructions"],
            **kwargs,
        )

    ## --- Parsed views ---
    @property
    def rules(self) -> RuleSet:
        return RuleSet.parse(self.rules_text)

    @property
    def instructions(self) -> InstructionSet:
        return InstructionSet.parse(self.instructions_text).with_branching()

    @property
    def iterations(self) -> int:
        return parse_iterations(self.iterations_text)

    ## --- Pipeline ---
    def expand(self) -> str:
        return expand(self.axiom, self.rules, self.iterations)

    def build(self) -> Mesh:
        """Builds the raw, unfitted mesh."""
        return generate_mesh(self.options, self.instructions.apply(self.expand()))

    def generate(self) -> Mesh:
        """Rebuilds the mesh from scratch and fits it into the display square."""
        size = self.display_size
        self.mesh = fit_mesh(self.build(), (0.0, 0.0, size, size))
        return self.mesh

    ## --- Change-aware setters ---
    def set_axiom(self, axiom: str):
        if self.axiom != axiom:
            self.axiom = axiom
            self.generate()

    def set_rules(self, text: str):
        previous = self.rules
        self.rules_text = text
        if previous != self.rules:
            self.generate()

    def set_instructions(self, text: str):
        previous = self.instructions
        self.instructions_text = text
        if previous != self.instructions:
            self.generate()

    def set_iterations(self, text: str):
        previous = self.iterations
        self.iterations_text = text
        if previous != self.iterations:
            self.generate()

    def restart(self):
        """Resets every field to the default preset and regenerates."""
        default = LSystem(options=self.options, display_size=self.display_size)
        self.axiom = default.axiom
        self.rules_text = default.rules_text
        self.instructions_text = default.instructions_text
        self.iterations_text = default.iterations_text
        self.generate()
