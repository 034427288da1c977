"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pathvalidate import sanitize_filepath
from pydantic import BaseModel, ConfigDict, field_validator

from hls_mirror.utils.url import is_http_url

MAX_WORKERS = 10000
# Generated names start at 10001, narrower widths would not sort.
MIN_NAME_WIDTH = 5
MAX_NAME_WIDTH = 12


class MirrorConfig(BaseModel):
    """A validated configuration model for one mirror run."""

    # Run inputs
    input_url: str
    output_dir: str

    # Download Settings
    workers: int = 1
    request_delay: float = 0.0
    max_attempts: int = 5
    retry_delay: float = 2.0
    request_timeout: float = 300.0

    # Naming Options
    name_prefix: str = ""
    name_width: int = 5

    # Internal field not loaded from INI file
    config_path: str = ""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    @field_validator("input_url")
    @classmethod
    def validate_input_url(cls, v: str) -> str:
        """Only absolute http(s) playlist URLs are accepted."""
        if not is_http_url(v):
            raise ValueError(f"Input must be an http(s) URL, got: {v!r}")
        return v

    @field_validator("output_dir")
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        """Expands the output directory to an absolute path."""
        if not v:
            raise ValueError("Output directory cannot be empty.")
        return str(Path(v).expanduser().absolute())

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensures a reasonable number of workers."""
        if v < 1 or v > MAX_WORKERS:
            raise ValueError(f"Workers must be between 1 and {MAX_WORKERS}.")
        return v

    @field_validator("request_delay", "retry_delay")
    @classmethod
    def validate_delays(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Delays cannot be negative.")
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Request timeout must be greater than zero.")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("At least one download attempt is required.")
        return v

    @field_validator("name_width")
    @classmethod
    def validate_name_width(cls, v: int) -> int:
        if v < MIN_NAME_WIDTH or v > MAX_NAME_WIDTH:
            raise ValueError(
                f"Name width must be between {MIN_NAME_WIDTH} and {MAX_NAME_WIDTH}."
            )
        return v

    @field_validator("name_prefix")
    @classmethod
    def validate_name_prefix(cls, v: str) -> str:
        """
        Validates the prefix placed in front of every generated file name.

        A trailing slash makes the prefix a sub-directory of the output directory.
        """
        if not v:
            return v
        if ".." in v.replace("\\", "/").split("/") or v.startswith(("/", "\\")):
            raise ValueError(
                "Name prefix cannot contain relative '..' or absolute paths."
            )
        is_directory = v.endswith(("/", "\\"))
        stem = v.rstrip("/\\")
        cleaned = str(sanitize_filepath(stem, platform="auto")) if stem else ""
        return f"{cleaned}/" if is_directory else cleaned

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def segment_dir(self) -> Path:
        """The directory generated file names land in (prefix directory part)."""
        return (self.output_path / f"{self.name_prefix}_").parent

    @property
    def index_path(self) -> Path:
        return self.output_path / "index.m3u8"

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        run_fields = {"input_url", "output_dir", "config_path"}
        return {key for key in cls.model_fields if key not in run_fields}
