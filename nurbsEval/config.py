"""
Evaluation settings.

A single module-level Settings instance controls the optional checks
performed by the validated geometry handles. The free evaluation
functions in nurbsEval.evaluate never consult it.

Settings can be loaded from a JSON file:

    {
      "check_domain": true,
      "domain_tol": 1e-10,
      "default_samples": 100
    }
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from typing import Dict, Any

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """
    Attributes:
        check_domain: Raise ValueError when a handle is evaluated outside
            its parametric domain (otherwise the nearest span is
            extrapolated)
        domain_tol: Tolerance used by the domain check
        default_samples: Default number of samples per direction used by
            nurbsEval.postprocess.sampling
    """
    check_domain: bool = False
    domain_tol: float = 1e-12
    default_samples: int = 50

    def update(self, values: Dict[str, Any]) -> None:
        """
        Update settings in place from a dictionary.

        All values are checked before any is applied, so a rejected
        update leaves the settings unchanged.
        """
        known = {f.name for f in fields(self)}
        for key in values:
            if key not in known:
                raise ValueError(f"Unknown setting: {key}")

        candidate = replace(self, **values)
        candidate._validate()

        for key in values:
            setattr(self, key, getattr(candidate, key))

    def _validate(self) -> None:
        # bool is a subclass of int, so it is excluded explicitly
        if not isinstance(self.check_domain, bool):
            raise ValueError(
                f"check_domain must be a boolean, got {self.check_domain!r}")
        if (isinstance(self.domain_tol, bool) or
                not isinstance(self.domain_tol, (int, float))):
            raise ValueError(
                f"domain_tol must be a number, got {self.domain_tol!r}")
        if (isinstance(self.default_samples, bool) or
                not isinstance(self.default_samples, int)):
            raise ValueError(
                f"default_samples must be an integer, got {self.default_samples!r}")

        self.domain_tol = float(self.domain_tol)
        if self.domain_tol < 0:
            raise ValueError("domain_tol must be non-negative")
        if self.default_samples < 2:
            raise ValueError("default_samples must be at least 2")


settings = Settings()


def load_settings(filename: str) -> Settings:
    """
    Load settings from a JSON file into the module-level settings.

    Parameters:
        filename: Path to the JSON file

    Returns:
        The updated module-level Settings instance
    """
    with open(filename) as f:
        values = json.load(f)

    if not isinstance(values, dict):
        raise ValueError(f"Settings file {filename} must contain a JSON object")

    settings.update(values)
    logger.debug("Loaded settings from %s: %s", filename, settings)
    return settings


def reset_settings() -> Settings:
    """Restore default settings."""
    settings.update({f.name: f.default for f in fields(Settings)})
    return settings
