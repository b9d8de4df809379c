# lsystem/mesh.py
"""
Turtle-graphics mesh construction.

The builder walks an instruction sequence with a stack of branch states and
emits a triangulated ribbon for every branch. Each ``Forward`` adds two
vertices across the branch and two triangles joining them to the branch's
trailing edge, so connected segments share vertices and the strip has no
seams. Branch width tapers by ``WIDTH_FALLOFF`` per level of nesting.

Coordinates follow screen conventions: the turtle starts at the origin facing
-Y, so an untransformed plant grows "up" on a y-down canvas.
"""
import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .instructions import Forward, Instruction, Pop, Push, Scale, Turn

Color = Tuple[float, float, float]
Rect = Tuple[float, float, float, float]  # x, y, width, height

WIDTH_FALLOFF = 0.9
FORWARD_AXIS = np.array([0.0, -1.0])
LEFT_AXIS = np.array([-1.0, 0.0])


def hex_to_rgb(color: str) -> Color:
    """
    Converts a ``#rrggbb`` color string into an RGB float triple in [0, 1].

    Examples:
        >>> hex_to_rgb("#ff0000")
        (1.0, 0.0, 0.0)
    """
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a color of the form #rrggbb, got {color!r}")
    try:
        channels = [int(value[i:i + 2], 16) for i in (0, 2, 4)]
    except ValueError:
        raise ValueError(f"Expected a color of the form #rrggbb, got {color!r}") from None
    return tuple(c / 255.0 for c in channels)


def rotation_matrix(angle: float) -> np.ndarray:
    """2x2 rotation matrix for ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s], [s, c]])


## --- Mesh Data ---
@dataclass(frozen=True)
class SystemOptions:
    """Per-run drawing options shared by every segment of one mesh."""
    branch_color: Color = hex_to_rgb("#6ac974")
    branch_width: float = 3.0


@dataclass
class Vertex:
    position: np.ndarray
    tex_coords: np.ndarray = field(default_factory=lambda: np.zeros(2))
    color: Color = (0.0, 0.0, 0.0)


@dataclass
class Mesh:
    """
    Append-only triangle mesh.

    Attributes:
        vertices (list): Vertex records, referenced by index
        indices (list): Vertex indices; each run of three forms one triangle
    """
    vertices: List[Vertex] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)

    def add_vertex(self, position, color: Color) -> int:
        self.vertices.append(Vertex(np.asarray(position, dtype=float), color=color))
        return len(self.vertices) - 1

    def add_triangle(self, a: int, b: int, c: int):
        self.indices.extend((a, b, c))

    def positions(self) -> np.ndarray:
        """Vertex positions as an (N, 2) array."""
        if not self.vertices:
            return np.zeros((0, 2))
        return np.array([v.position for v in self.vertices])

    def triangles(self) -> np.ndarray:
        """Triangle vertex indices as an (M, 3) array."""
        return np.array(self.indices, dtype=np.int64).reshape(-1, 3)

    def __len__(self):
        return len(self.vertices)


## --- Branch Stack Machine ---
@dataclass
class BranchState:
    """
    Turtle state for one branch.

    Attributes:
        position (np.ndarray): Current turtle position
        rotation (np.ndarray): 2x2 heading matrix
        scale (float): Multiplier applied to forward lengths
        edge (tuple): Indices of the two vertices forming the trailing edge
    """
    position: np.ndarray
    rotation: np.ndarray
    scale: float
    edge: Tuple[int, int]

    def copy(self) -> "BranchState":
        return BranchState(self.position.copy(), self.rotation.copy(), self.scale, self.edge)


class TurtleMeshBuilder:
    """
    Builds a branch mesh from turtle instructions.

    The stack starts with a single root branch at the origin whose trailing
    edge is two seed vertices ``branch_width`` apart. The root is never popped;
    an unmatched ``Pop`` is ignored.

    Examples:
        >>> builder = TurtleMeshBuilder(SystemOptions(branch_width=3.0))
        >>> mesh = builder.build([Forward(10.0)])
        >>> len(mesh.vertices), len(mesh.indices)
        (4, 6)
    """
    def __init__(self, options: SystemOptions):
        self.options = options
        self.mesh = Mesh()
        half_width = options.branch_width / 2.0
        left = self.mesh.add_vertex((-half_width, 0.0), options.branch_color)
        right = self.mesh.add_vertex((half_width, 0.0), options.branch_color)
        self.stack: List[BranchState] = [
            BranchState(np.zeros(2), np.eye(2), 1.0, (left, right))
        ]

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def branch(self) -> BranchState:
        return self.stack[-1]

    def forward(self, length: float):
        branch = self.branch
        length *= branch.scale
        width = self.options.branch_width * WIDTH_FALLOFF ** self.depth

        forward = branch.rotation @ FORWARD_AXIS * length
        left = branch.rotation @ LEFT_AXIS * (width / 2.0)

        color = self.options.branch_color
        a = self.mesh.add_vertex(branch.position + left, color)
        b = self.mesh.add_vertex(branch.position - left, color)

        e0, e1 = branch.edge
        self.mesh.add_triangle(e0, e1, a)
        self.mesh.add_triangle(e1, a, b)

        branch.edge = (a, b)
        branch.position = branch.position + forward

    def turn(self, angle: float):
        self.branch.rotation = self.branch.rotation @ rotation_matrix(math.radians(angle))

    def scale(self, factor: float):
        self.branch.scale *= factor

    def push(self):
        self.stack.append(self.branch.copy())

    def pop(self):
        if len(self.stack) > 1:
            self.stack.pop()

    def apply(self, instruction: Instruction):
        """Applies one instruction to the branch on top of the stack."""
        if isinstance(instruction, Forward):
            self.forward(instruction.length)
        elif isinstance(instruction, Turn):
            self.turn(instruction.angle)
        elif isinstance(instruction, Scale):
            self.scale(instruction.factor)
        elif isinstance(instruction, Push):
            self.push()
        elif isinstance(instruction, Pop):
            self.pop()
        else:
            raise TypeError(f"Unknown instruction: {instruction!r}")

    def build(self, instructions: Sequence[Instruction]) -> Mesh:
        for instruction in instructions:
            self.apply(instruction)
        return self.mesh


def generate_mesh(options: SystemOptions, instructions: Sequence[Instruction]) -> Mesh:
    """Builds a fresh mesh for ``instructions``; nothing is shared between calls."""
    return TurtleMeshBuilder(options).build(instructions)


## --- Display Fitting ---
def mesh_bounds(mesh: Mesh) -> Tuple[float, float, float, float]:
    """Axis-aligned bounds of the vertex positions as (min_x, min_y, max_x, max_y)."""
    points = mesh.positions()
    if not len(points):
        return 0.0, 0.0, 0.0, 0.0
    min_x, min_y = points.min(axis=0)
    max_x, max_y = points.max(axis=0)
    return float(min_x), float(min_y), float(max_x), float(max_y)


def fit_mesh(mesh: Mesh, rect: Rect) -> Mesh:
    """
    Scales and translates the mesh in place to fit inside ``rect``.

    The scale is uniform, so the aspect ratio is preserved. The center of the
    mesh's bottom edge is anchored to the center of the rectangle's bottom edge
    (y grows downward). An axis with zero extent does not constrain the scale.

    Args:
        mesh: Mesh to transform
        rect: Target rectangle as (x, y, width, height)

    Returns:
        The same mesh, for chaining
    """
    min_x, min_y, max_x, max_y = mesh_bounds(mesh)
    x, y, width, height = rect

    ratios = [t / b for t, b in ((width, max_x - min_x), (height, max_y - min_y)) if b > 0]
    scale = min(ratios) if ratios else 1.0

    bounds_bottom = np.array([(min_x + max_x) / 2.0, max_y])
    rect_bottom = np.array([x + width / 2.0, y + height])
    offset = rect_bottom - bounds_bottom * scale

    for vertex in mesh.vertices:
        vertex.position = vertex.position * scale + offset
    return mesh
