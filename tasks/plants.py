import pandas as pd
import itertools
from tasks.base_task import Task
from lsystem.presets import PRESETS


class PlantsTask(Task):
    """
    A program generation task sweeping the preset grammars over iteration
    counts and trunk widths.
    """

    def __init__(self, task_name=None, presets=None, iterations=(3, 4, 5), branch_widths=(3.0,), **kwargs):
        """Initializes the PlantsTask."""
        super().__init__(task_name=task_name or "plants", **kwargs)
        self.presets = list(presets) if presets else sorted(PRESETS)
        self.iterations = list(iterations)
        self.branch_widths = list(branch_widths)

    def _create_program_record(self, params):
        """Builds a single program row from a (preset, iterations, width) tuple."""
        preset_name, n_iterations, branch_width = params
        preset = PRESETS[preset_name]
        return {
            "preset": preset_name,
            "iterations": n_iterations,
            "branch_width": branch_width,
            "axiom": preset["axiom"],
            "rules": preset["rules"],
            "instructions": preset["instructions"],
        }

    def generate_programs(self):
        """Generates a DataFrame of plant programs using itertools."""
        param_grid = [self.presets, self.iterations, self.branch_widths]
        records = [self._create_program_record(params) for params in itertools.product(*param_grid)]
        print(f"✅ Generated {len(records)} total plant programs.")
        return pd.DataFrame(records)


if __name__ == "__main__":
    task = PlantsTask()
    task.run()
