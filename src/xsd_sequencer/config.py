"""Configuration management for xsd-sequencer.

This module provides a pydantic-based configuration system that loads settings
from environment variables and describes where schemas are read from and where
generated ordering files are written.
"""

from pathlib import Path
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from xsd_sequencer.schema_tree.nodes import IGNORED_NODE_NAMES
from xsd_sequencer.schema_tree.resolver import CyclePolicy


class Config(BaseSettings):
    """Configuration settings for xsd-sequencer.

    This class uses pydantic-settings to automatically load configuration
    from environment variables. All settings can be overridden by setting
    the corresponding environment variable.

    Environment Variables:
        XSD_SEQUENCER_SCHEMA_DIR: Directory scanned for ``*.xsd`` files
        XSD_SEQUENCER_OUTPUT_DIR: Root directory for generated files
        XSD_SEQUENCER_OUTPUT_FILE: File name written for each schema
        XSD_SEQUENCER_CYCLE_POLICY: ``fail`` or ``reuse``
        XSD_SEQUENCER_EXTRA_IGNORED_NODES: JSON list of extra marker names
        XSD_SEQUENCER_LOG_LEVEL: Logging level used by the CLI

    Example:
        >>> config = Config()
        >>> for schema_file in config.iter_schema_files():
        ...     print(schema_file, "->", config.output_path_for(schema_file))
    """

    model_config = SettingsConfigDict(
        env_prefix="XSD_SEQUENCER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    schema_dir: Path = Field(
        default=Path("schemas"),
        description="Directory containing the XSD schemas to process",
    )

    output_dir: Path = Field(
        default=Path("generators"),
        description="Root directory; each schema gets a lower-cased subdirectory",
    )

    output_file: str = Field(
        default="schema_ordering.go",
        description="Name of the generated file inside each schema's subdirectory",
    )

    cycle_policy: CyclePolicy = Field(
        default=CyclePolicy.FAIL,
        description="How cyclic type references are handled during resolution",
    )

    extra_ignored_nodes: List[str] = Field(
        default_factory=list,
        description="Additional node names elided from path keys",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level for the CLI"
    )

    def ignored_node_names(self) -> frozenset:
        """Return the full set of marker names elided from path keys."""
        return IGNORED_NODE_NAMES | frozenset(self.extra_ignored_nodes)

    def iter_schema_files(self) -> List[Path]:
        """List the schema files to process, sorted by name.

        Raises:
            FileNotFoundError: If the schema directory does not exist.
        """
        if not self.schema_dir.is_dir():
            raise FileNotFoundError(f"Schema directory not found: {self.schema_dir}")
        return sorted(p for p in self.schema_dir.iterdir() if p.suffix == ".xsd" and p.is_file())

    def output_path_for(self, schema_file: Path) -> Path:
        """Return where the generated file for a schema is written.

        Example: schemas/FA_2.xsd -> generators/fa_2/schema_ordering.go
        """
        return self.output_dir / schema_file.stem.lower() / self.output_file

    def validate_config(self) -> dict[str, bool]:
        """Report which parts of the configuration are usable.

        Returns:
            Dictionary with validation status for each setting:
            {
                "schema_dir_exists": bool,
                "output_file_configured": bool,
            }
        """
        return {
            "schema_dir_exists": self.schema_dir.is_dir(),
            "output_file_configured": bool(self.output_file),
        }

    def __repr__(self) -> str:
        return (
            f"Config("
            f"schema_dir={str(self.schema_dir)!r}, "
            f"output_dir={str(self.output_dir)!r}, "
            f"output_file={self.output_file!r}, "
            f"cycle_policy={self.cycle_policy.value!r}"
            f")"
        )


def load_config() -> Config:
    """Load configuration from environment variables.

    Returns:
        A Config instance with settings loaded from environment.
    """
    return Config()
