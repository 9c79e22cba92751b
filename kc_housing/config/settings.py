"""Settings configuration for the housing analysis pipeline."""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any
import json

from . import constants
from ..utils.exceptions import ConfigurationError


@dataclass
class Settings:
    """Configuration settings for a pipeline run."""

    # Data paths
    data_path: Optional[str] = None
    output_path: Optional[str] = None

    # Reference data overrides (packaged tables when None)
    corrections_path: Optional[str] = None
    regions_path: Optional[str] = None

    # Split parameters
    train_fraction: float = constants.DEFAULT_TRAIN_FRACTION
    seed: int = constants.DEFAULT_SEED

    # Model parameters
    remove_outliers: bool = True
    outlier_threshold: float = constants.OUTLIER_THRESHOLD
    full_logistic_model: bool = True
    decision_threshold: float = constants.DECISION_THRESHOLD

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_json(cls, json_path: str) -> "Settings":
        """Load settings from JSON file."""
        with open(json_path, 'r') as f:
            config = json.load(f)
        return cls.from_dict(config)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "Settings":
        """Create settings from dictionary."""
        try:
            return cls(**config_dict)
        except TypeError as e:
            raise ConfigurationError(f"Unknown setting: {e}") from e

    def to_json(self, json_path: str) -> None:
        """Save settings to JSON file."""
        config_dict = {
            k: v for k, v in asdict(self).items()
            if v is not None
        }
        with open(json_path, 'w') as f:
            json.dump(config_dict, f, indent=2)

    def validate(self) -> None:
        """Validate settings consistency."""
        if not 0 < self.train_fraction < 1:
            raise ConfigurationError("Training fraction must be between 0 and 1")

        if self.outlier_threshold <= 0:
            raise ConfigurationError("Outlier threshold must be positive")

        if not 0 < self.decision_threshold < 1:
            raise ConfigurationError("Decision threshold must be between 0 and 1")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")


def get_default_settings() -> Settings:
    """Get default settings instance."""
    return Settings()
