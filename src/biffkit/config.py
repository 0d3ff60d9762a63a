"""
biffkit Diagnostics Configuration
=================================

Settings that change how records are reported, never how they are read or
written. Configuration can come from:
- Default values (defined here)
- Environment variables
- The biffdump command line (--verbose)

Environment variables (all optional):
    BIFFKIT_VERBOSE: "1", "true", "yes" or "on" enables verbose diagnostics
    BIFFKIT_HEX_WIDTH: Bytes per line in multi-line hex dumps (integer)
"""

from dataclasses import dataclass
import os


_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class DiagnosticsConfig:
    """
    Diagnostic settings for record reading and rendering.

    Attributes:
        verbose: Warn about unknown records found in the chart sub-record
            sid range (default: False)
        hex_width: Bytes per line in multi-line hex dumps (default: 16)
    """

    verbose: bool = False
    hex_width: int = 16

    @classmethod
    def from_env(cls) -> "DiagnosticsConfig":
        """
        Create a DiagnosticsConfig from environment variables.

        Invalid values are ignored and the default is kept.
        """
        config = cls()

        if verbose := os.environ.get("BIFFKIT_VERBOSE"):
            config.verbose = verbose.strip().lower() in _TRUE_VALUES

        if width := os.environ.get("BIFFKIT_HEX_WIDTH"):
            try:
                value = int(width)
            except ValueError:
                value = 0
            if value > 0:
                config.hex_width = value

        return config


_config = DiagnosticsConfig.from_env()


def get_config() -> DiagnosticsConfig:
    """Return the process-wide diagnostics configuration."""
    return _config


def set_config(config: DiagnosticsConfig) -> DiagnosticsConfig:
    """
    Replace the process-wide diagnostics configuration.

    Returns:
        The previous configuration, so callers can restore it.
    """
    global _config
    previous = _config
    _config = config
    return previous
