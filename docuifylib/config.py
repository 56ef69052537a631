"""Configuration system for DocuifyLib.

This module defines how users specify build behavior: whether content is
preloaded, how many loads run at once, and what a flat build returns.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class PreloadConfig:
    """Configuration for eager content loading."""

    enabled: bool = False        # Preload as part of build()/flat_build()
    concurrency: int = 10        # Number of concurrent loads
    keep_content: bool = False   # Store loaded text on node.content

    def validate(self) -> List[str]:
        """Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int):
            errors.append("concurrency must be an integer")
        elif self.concurrency < 1:
            errors.append("concurrency must be positive")
        return errors


@dataclass
class EngineConfig:
    """Complete configuration for a DocuifyEngine."""

    preload: PreloadConfig = field(default_factory=PreloadConfig)
    files_only: bool = True      # flat_build() drops folder nodes

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        return [f"preload: {error}" for error in self.preload.validate()]
