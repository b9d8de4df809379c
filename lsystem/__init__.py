from .rules import Rule, RuleSet, expand, parse_iterations
from .instructions import Forward, Turn, Scale, Push, Pop, Instruction, InstructionSet, parse_instruction
from .mesh import (
    SystemOptions, Vertex, Mesh, BranchState, TurtleMeshBuilder,
    generate_mesh, mesh_bounds, fit_mesh, hex_to_rgb,
)
from .system import LSystem, DISPLAY_SIZE, DEFAULT_ITERATIONS
from .presets import PRESETS, DEFAULT_PRESET
