import pytest

pytest.importorskip("cairo")
pytest.importorskip("PIL")

from tasks.plants import PlantsTask  # noqa: E402


class TestPlantsTask:
    def test_generate_programs(self, tmp_path) -> None:
        task = PlantsTask(data_dir=str(tmp_path), presets=["weed", "bush"], iterations=[1, 2], branch_widths=[2.0, 4.0])
        df = task.generate_programs()
        assert len(df) == 8
        assert set(df.columns) >= {"preset", "axiom", "rules", "instructions", "iterations", "branch_width"}

    def test_run_renders_and_caches(self, tmp_path) -> None:
        task = PlantsTask(data_dir=str(tmp_path), presets=["weed"], iterations=[1, 2], canvas_dim=32)
        df = task.run()
        assert len(df) == 2
        assert task.metadata_path.exists()
        assert task.summary_path.exists()
        assert (df["n_vertices"] > 2).all()

        cached = PlantsTask(data_dir=str(tmp_path), presets=["weed"], iterations=[1, 2, 3], canvas_dim=32).run()
        assert len(cached) == 2
