import pandas as pd
from abc import ABC, abstractmethod
from pathlib import Path
from PIL import Image, ImageDraw, ImageFont
import traceback
from tqdm import tqdm

from lsystem.core import render_mesh_to_image, export_image, system_from_row, PROGRAM_COLUMNS
from lsystem.mesh import SystemOptions, hex_to_rgb


class Task(ABC):
    """An abstract base class for generating and rendering batches of L-system plants.

    Subclasses describe *which* programs to render by returning a DataFrame with
    one row per program (the program columns plus any descriptive metadata).
    The base class renders each row to a PNG, records the metadata CSV and
    writes a labelled contact sheet of the results.
    """

    def __init__(self, task_name: str, data_dir: str = "data", canvas_dim: int = 450,
                 branch_color: str = "#6ac974", summary_columns: int = 4, overwrite: bool = False, **kwargs):
        """Initializes the Task instance, setting up paths and directories."""
        self.task_name = task_name
        self.data_dir = Path(data_dir)
        self.canvas_dim = canvas_dim
        self.branch_color = hex_to_rgb(branch_color)
        self.summary_columns = summary_columns
        self.overwrite = overwrite
        self._setup_paths()
        self._create_directories()

    def _setup_paths(self):
        """Initializes all necessary directory and file paths."""
        task_root = self.data_dir / self.task_name
        self.images_dir = task_root / "images"
        self.metadata_path = task_root / "metadata.csv"
        self.summary_path = task_root / "summary.png"

    def _create_directories(self):
        """Ensures that all required directories exist, creating them if necessary."""
        self.images_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def generate_programs(self) -> pd.DataFrame:
        """Generates program rows (axiom, rules, instructions, iterations, branch_width) and their metadata."""
        pass

    # --- Main Orchestration ---
    def run(self) -> pd.DataFrame:
        """
        Executes the full pipeline. If metadata.csv exists, load existing data.
        Otherwise, generate and render all programs and write the summary sheet.
        """
        if self.metadata_path.exists() and not self.overwrite:
            print(f"✅ Found existing metadata at '{self.metadata_path}'. Skipping generation.")
            return pd.read_csv(self.metadata_path, keep_default_na=False)
        print("🔍 No existing metadata found. Starting full generation pipeline...")
        df = self._generate_and_render()
        self._generate_summary(df)
        return df

    # --- Step 1: Program Rendering ---
    def _options_for(self, row: pd.Series) -> SystemOptions:
        width = float(row["branch_width"]) if "branch_width" in row else SystemOptions.branch_width
        return SystemOptions(branch_color=self.branch_color, branch_width=width)

    def _generate_and_render(self) -> pd.DataFrame:
        """Generates programs, renders them as images, and saves metadata."""
        df = self.generate_programs()
        missing = [col for col in PROGRAM_COLUMNS if col not in df.columns]
        if missing:
            raise KeyError(f"generate_programs() is missing columns: {missing}")

        filepaths, n_vertices = [], []
        for i, row in tqdm(df.iterrows(), desc="Rendering plants", unit="plant", leave=False, total=len(df)):
            output_path = self.images_dir / f"{i}.png"
            try:
                system = system_from_row(row)
                system.options = self._options_for(row)
                mesh = system.build()
                image_array = render_mesh_to_image(mesh, canvas_dim=self.canvas_dim)
                export_image(image_array, str(output_path))
                filepaths.append(str(output_path))
                n_vertices.append(len(mesh.vertices))
            except Exception as e:
                print(f"❌ Error rendering row {i} (axiom '{str(row['axiom'])[:50]}'): {e}")
                print(traceback.format_exc())
                filepaths.append(None)
                n_vertices.append(0)

        df["n_vertices"] = n_vertices
        df["render_filepath"] = filepaths
        df.dropna(subset=["render_filepath"], inplace=True)
        df.to_csv(self.metadata_path, index=False)

        print(f"✅ Rendered {len(df)} plants for task '{self.task_name}'")
        print(f"✅ Images saved to: {self.images_dir}")
        print(f"✅ Metadata saved to: {self.metadata_path}")
        return df

    # --- Step 2: Summary Sheet ---
    def _generate_summary(self, df: pd.DataFrame):
        """Pastes every rendered plant into one labelled grid image."""
        if df.empty:
            return
        images = []
        for i, row in df.iterrows():
            img = Image.open(row["render_filepath"]).convert("RGB")
            images.append(self._add_label_to_image(img, str(i)))
        n_cols = min(self.summary_columns, len(images))
        n_rows = -(-len(images) // n_cols)
        img_w, img_h = images[0].size
        grid = Image.new("RGB", (n_cols * img_w, n_rows * img_h), "white")
        for i, img in enumerate(images):
            grid.paste(img, ((i % n_cols) * img_w, (i // n_cols) * img_h))
        grid.save(self.summary_path)
        print(f"✅ Summary saved to: {self.summary_path}")

    # --- Static Utility Methods ---
    @staticmethod
    def _add_label_to_image(image: Image.Image, label: str) -> Image.Image:
        """Adds a text label to the upper left corner of an image."""
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default()
        draw.text((10, 10), label, fill="black", font=font)
        return image
