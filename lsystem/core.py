# lsystem/core.py
"""
Rendering utilities for generated L-system meshes.

This module turns meshes into images and drives batch rendering. It includes:
- Triangle rasterisation of a mesh using Cairo graphics
- Image export utilities
- CSV batch processing capabilities

Generation itself (rewriting, instruction mapping, mesh construction) lives in
``rules``, ``instructions``, ``mesh`` and ``system``; nothing here changes how a
mesh is built, only how it is displayed.
"""
import os
import imageio
import numpy as np
import pandas as pd
import cairo

from .mesh import Mesh, fit_mesh
from .system import DISPLAY_SIZE, LSystem


## --- Core Constants ---
CANVAS_WIDTH_HEIGHT = int(DISPLAY_SIZE)  # Output image dimensions in pixels
BACKGROUND_COLOR = (1.0, 1.0, 1.0)
PROGRAM_COLUMNS = ("axiom", "rules", "instructions", "iterations")


def render_mesh_to_image(
    mesh: Mesh,
    canvas_dim: int = CANVAS_WIDTH_HEIGHT,
    margin: float = 0.0,
    fit: bool = True
) -> np.ndarray:
    """
    Renders a triangle mesh to a raster image using Cairo graphics.

    Each triangle is filled with the color of its first vertex. When ``fit`` is
    set the mesh is first scaled into the canvas (minus ``margin`` on every
    side) with its base anchored to the bottom edge; this modifies the mesh's
    vertex positions in place.

    Args:
        mesh: Mesh to draw
        canvas_dim: Output image size in pixels (square canvas)
        margin: Empty border in pixels kept around the fitted mesh
        fit: Whether to fit the mesh into the canvas before drawing

    Returns:
        numpy array of shape (canvas_dim, canvas_dim, 3) with RGB values [0,1]

    Examples:
        >>> mesh = LSystem(iterations_text="3").build()
        >>> image = render_mesh_to_image(mesh)
        >>> image.shape
        (450, 450, 3)
    """
    if fit:
        inner = canvas_dim - 2 * margin
        fit_mesh(mesh, (margin, margin, inner, inner))

    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, canvas_dim, canvas_dim)
    ctx = cairo.Context(surface)

    # --- Configure Canvas ---
    ctx.set_source_rgb(*BACKGROUND_COLOR)
    ctx.paint()
    ctx.set_antialias(cairo.ANTIALIAS_DEFAULT)

    # --- Draw Triangles ---
    positions = mesh.positions()
    for a, b, c in mesh.triangles():
        ctx.set_source_rgb(*mesh.vertices[a].color)
        ctx.move_to(*positions[a])
        ctx.line_to(*positions[b])
        ctx.line_to(*positions[c])
        ctx.close_path()
        ctx.fill()

    # --- Extract Buffer ---
    surface.flush()
    buf = surface.get_data()
    stride = surface.get_stride()
    img_array = np.ndarray(shape=(canvas_dim, stride // 4, 4), dtype=np.uint8, buffer=buf)[:, :canvas_dim]
    img_array = img_array[:, :, [2, 1, 0]].astype(np.float32) / 255.0 # Reverse BGRA to RGB
    return img_array


def export_image(image_array: np.ndarray, export_path: str):
    """
    Exports a rendered image array to a PNG file.

    Takes a numpy array representing an image and saves it as a PNG file,
    automatically creating the output directory if it doesn't exist.

    Args:
        image_array: RGB image as numpy array with values in [0,1] range
        export_path: File path where the PNG should be saved
    """
    output_dir = os.path.dirname(export_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    imageio.imwrite(export_path, (image_array * 255).astype(np.uint8))


def system_from_row(row) -> LSystem:
    """Builds an LSystem from a table row holding the program columns."""
    return LSystem(
        axiom=str(row["axiom"]),
        rules_text=str(row["rules"]),
        instructions_text=str(row["instructions"]),
        iterations_text=str(row["iterations"]),
    )


## --- CSV Processing Utility ---
def render_from_csv(name: str, output_root: str = "output", canvas_dim: int = CANVAS_WIDTH_HEIGHT):
    """
    Batch processes L-system programs from a CSV file and renders them to images.

    Reads a CSV file with one program per row, renders each program, saves the
    resulting images, and creates an updated CSV with image file paths. Errors
    are reported and the row's path is left empty.

    Args:
        name: Base name for input CSV file and output directory
        output_root: Directory holding the input CSV
        canvas_dim: Output image size in pixels

    Input:
        - Reads from: {output_root}/{name}.csv with columns axiom, rules,
          instructions, iterations

    Output:
        - Images saved to: {output_root}/{name}/images/{row_index}.png
        - Updated CSV saved to: {output_root}/{name}/rendered.csv

    Raises:
        FileNotFoundError: If the input CSV file doesn't exist
        KeyError: If one of the program columns isn't found in the CSV
    """
    input_csv_path = os.path.join(output_root, f"{name}.csv")
    if not os.path.exists(input_csv_path):
        raise FileNotFoundError(f"Input CSV not found: {input_csv_path}")

    df = pd.read_csv(input_csv_path, keep_default_na=False)
    for col in PROGRAM_COLUMNS:
        if col not in df.columns:
            raise KeyError(f"Column '{col}' not found in {input_csv_path}")

    image_output_dir = os.path.join(output_root, name, "images")
    os.makedirs(image_output_dir, exist_ok=True)

    render_filepaths = []
    for i, row in df.iterrows():
        output_path = os.path.join(image_output_dir, f"{i}.png")
        try:
            mesh = system_from_row(row).build()
            image_array = render_mesh_to_image(mesh, canvas_dim=canvas_dim)
            export_image(image_array, output_path)
            render_filepaths.append(output_path)
        except Exception as e:
            print(f"❌ Error processing row {i} (axiom '{str(row['axiom'])[:50]}'): {e}")
            render_filepaths.append("")

    df["render_filepath"] = render_filepaths
    rendered_csv_path = os.path.join(output_root, name, "rendered.csv")
    df.to_csv(rendered_csv_path, index=False)
    return df
