from affinity_chain.config.run_config import RunConfig, load_run_config
from affinity_chain.config.yaml_io import read_yaml

__all__ = [
    "RunConfig",
    "load_run_config",
    "read_yaml",
]
