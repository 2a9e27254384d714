"""Configuration manager for the dealer price matching system."""

import json
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, ValidationError

DEFAULT_CONFIG_FILE = "output_config.json"


class PriceMatchConfig(BaseModel):
    """Output and attribution settings for price matching.

    Contains the "not available" marker, default dealer labels, price
    formatting precision and the display names of output columns.
    """

    model_config = ConfigDict(
        frozen=True,
        validate_assignment=True,  # Immutable configuration
    )

    na_marker: str = Field(default="N/A", description="Value emitted for missing comparisons")
    primary_dealer_label: str = Field(default="1", description="Label of the first dealer file")
    secondary_dealer_label: str = Field(default="2", description="Label of the second dealer file")

    price_decimals: int = Field(default=2, ge=0, description="Decimals for formatted prices")
    small_price_decimals: int = Field(
        default=3, ge=0, description="Decimals for repriced values below the threshold"
    )
    small_price_threshold: float = Field(
        default=10, ge=0, description="Repriced values below this keep extra precision"
    )

    input_encoding: str = Field(default="utf-8", description="Encoding of uploaded CSV files")
    output_delimiter: str = Field(
        default=",", min_length=1, max_length=1, description="Delimiter of produced CSV"
    )

    column_headers: dict[str, str] = Field(
        default_factory=dict, description="Display name for each output column"
    )


class PriceMatchConfigManager:
    """Manages configuration for the dealer price matching system.

    Loads configuration from a JSON file and provides a unified interface
    for accessing labels, formatting settings and column headers.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config directory. Defaults to this module's dir.
        """
        if config_path is None:
            config_path = Path(__file__).parent

        self.config_path = config_path
        self.output_config_path = config_path / DEFAULT_CONFIG_FILE

        self._load_output_config()

    def _load_output_config(self) -> None:
        """Load output configuration from JSON file."""
        try:
            with open(self.output_config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise FileNotFoundError(
                f"Output config not found at {self.output_config_path}"
            ) from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in output config: {e}") from e

        if not isinstance(data, dict):
            raise ValueError("Output config must be a dictionary")

        try:
            self.config = PriceMatchConfig(**data)
        except ValidationError as e:
            raise ValueError(f"Invalid output config: {e}") from e

    @property
    def na_marker(self) -> str:
        return self.config.na_marker

    def get_primary_dealer_label(self) -> str:
        """Get the default label attributed to the first dealer file."""
        return self.config.primary_dealer_label

    def get_secondary_dealer_label(self, explicit_dealer_number: Optional[int] = None) -> str:
        """Get the label attributed to the second dealer file.

        Args:
            explicit_dealer_number: Caller override for the second dealer's number

        Returns:
            The explicit number as text when given, otherwise the configured default
        """
        if explicit_dealer_number is not None:
            return str(explicit_dealer_number)
        return self.config.secondary_dealer_label

    def get_column_header(self, column_name: str) -> str:
        """Get display header for an output column, falling back to its name."""
        return self.config.column_headers.get(column_name, column_name)

    def get_output_delimiter(self) -> str:
        return self.config.output_delimiter

    def get_input_encoding(self) -> str:
        return self.config.input_encoding

    def reload_config(self) -> None:
        """Reload configuration from file.

        Useful for development and testing when the config file changes.
        """
        self._load_output_config()
