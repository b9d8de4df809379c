import hydra
from omegaconf import DictConfig
import pyrootutils

# project root setup
root = pyrootutils.setup_root(__file__, indicator="pyproject.toml", dotenv=True, pythonpath=True)

@hydra.main(version_base=None, config_path="config", config_name="run")
def main(cfg: DictConfig) -> None:

    # Instantiate the task from config
    task = hydra.utils.instantiate(cfg.task)
    df = task.run()
    print(f"✅ Task '{task.task_name}' finished with {len(df)} plants!")


if __name__ == "__main__":
    main()
