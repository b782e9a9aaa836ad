from __future__ import annotations
from dataclasses import dataclass, fields, replace
from importlib.resources import files as importlib_files
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from affinity_chain.config.yaml_io import read_yaml
from affinity_chain.folding.collapse_recurrences import BACKENDS

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class RunConfig:
    """
    Settings for one command-line run.

    Attributes
    ----------
    backend : str
        DP backend, "python" or "numba".
    verbose : int
        0 for warnings only, 1 for INFO, 2 for DEBUG.
    log_file : Optional[str]
        Explicit log file path. When None and `verbose > 0`, a timestamped
        file is created under `var/log/`.
    output_format : str
        "text" or "json".
    """
    backend: str = "python"
    verbose: int = 0
    log_file: Optional[str] = None
    output_format: str = "text"

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Returns a copy with every non-None override applied and validated."""
        applied = {key: value for key, value in overrides.items() if value is not None}
        return _validated(replace(self, **applied))


def default_config_path() -> Path:
    """Path of the packaged default configuration file."""
    return Path(str(importlib_files("affinity_chain") / "data" / "default_run_config.yaml"))


def load_run_config(path: str | Path | None = None) -> RunConfig:
    """
    Loads a `RunConfig`, layering a user file over the packaged defaults.

    Parameters
    ----------
    path : str | Path | None
        Optional user YAML file. Keys it sets replace the defaults.

    Returns
    -------
    RunConfig
        The merged, validated configuration.

    Raises
    ------
    ValueError
        If a file is not YAML, holds an unknown key, or holds an invalid value.
    """
    raw: Dict[str, Any] = dict(read_yaml(default_config_path()))
    if path is not None:
        logger.info(f"Loading run configuration from: {path}")
        raw.update(read_yaml(path))

    known = {f.name for f in fields(RunConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    return _validated(RunConfig(**raw))


def _validated(config: RunConfig) -> RunConfig:
    """Checks field values, raising `ValueError` on the first bad one."""
    if config.backend not in BACKENDS:
        raise ValueError(f"backend must be one of {BACKENDS}, got {config.backend!r}")
    if isinstance(config.verbose, bool) or not isinstance(config.verbose, int) or config.verbose < 0:
        raise ValueError(f"verbose must be a non-negative integer, got {config.verbose!r}")
    if config.log_file is not None and not isinstance(config.log_file, str):
        raise ValueError(f"log_file must be a string or null, got {config.log_file!r}")
    if config.output_format not in OUTPUT_FORMATS:
        raise ValueError(f"output_format must be one of {OUTPUT_FORMATS}, got {config.output_format!r}")
    return config
