"""YAML configuration loader with validation."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Any, Dict

import yaml

from stackwipe.resourcetype import get_resource_types


@dataclass
class Config:
    """stackwipe configuration."""
    region: Optional[str] = None
    profile: Optional[str] = None
    stack_names: List[str] = field(default_factory=list)
    keyword: Optional[str] = None
    resource_types: List[str] = field(default_factory=get_resource_types)
    concurrency: Optional[int] = None
    json_logs: bool = False
    verbosity: int = 0
    assume_yes: bool = False

    def validate(self) -> None:
        """Check option combinations the deleter cannot work with."""
        if not self.stack_names and not self.keyword:
            raise ValueError("Either stack names or a keyword must be given")
        if self.stack_names and self.keyword:
            raise ValueError("Stack names and a keyword cannot be combined")
        if self.concurrency is not None and self.concurrency < 1:
            raise ValueError(f"Concurrency must be a positive number: {self.concurrency}")
        supported = get_resource_types()
        unknown = [t for t in self.resource_types if t not in supported]
        if unknown:
            raise ValueError(
                f"Unsupported resource types: {', '.join(unknown)} "
                f"(supported: {', '.join(supported)})"
            )


def load_config(path: Optional[str] = None) -> Config:
    """Load config from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, returns default config.

    Returns:
        Config instance

    Raises:
        FileNotFoundError: If specified path doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return _parse_config(data)


def _parse_config(data: Dict[str, Any]) -> Config:
    """Parse config dict into Config dataclass."""
    return Config(
        region=data.get("region"),
        profile=data.get("profile"),
        stack_names=list(data.get("stack_names", [])),
        keyword=data.get("keyword"),
        resource_types=list(data.get("resource_types", get_resource_types())),
        concurrency=data.get("concurrency"),
        json_logs=data.get("json_logs", False),
        verbosity=data.get("verbosity", 0),
        assume_yes=data.get("assume_yes", False),
    )
