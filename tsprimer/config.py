"""
Shared Settings

Keep run-level knobs (seed, output directory) in env / .env.
Use a Settings object so every walkthrough logs the same config.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Run-level configuration for both walkthroughs"""
    seed: int = 42
    output_dir: Optional[str] = None


def load_settings(seed: int = 42, output_dir: Optional[str] = None) -> Settings:
    """
    Load settings from environment.

    Reads TSPRIMER_SEED and TSPRIMER_OUTPUT_DIR from .env file or environment
    variables. Explicit arguments are used when the variables are unset.
    """
    load_dotenv()

    raw_seed = os.getenv("TSPRIMER_SEED")
    if raw_seed is not None:
        try:
            seed = int(raw_seed)
        except ValueError:
            raise ValueError(f"TSPRIMER_SEED must be an integer, got {raw_seed!r}")

    output_dir = os.getenv("TSPRIMER_OUTPUT_DIR") or output_dir

    return Settings(seed=seed, output_dir=output_dir)
