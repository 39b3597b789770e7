"""Backend configuration.

Home, working directory and temporary directory are carried explicitly by
the backend instead of being read from process state on every lookup.
"""

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain.path_validator import as_folder_path


class BackendConfig(BaseModel):
    """Process-independent view of the folders a backend resolves against."""

    model_config = ConfigDict(frozen=True)

    home: str | None = Field(None, description="Home folder, None when unresolvable")
    current_directory: str = Field(..., description="Folder that relative paths resolve against")
    temporary_directory: str = Field(..., description="Folder for temporary files")
    search_paths: dict[str, str] = Field(
        default_factory=dict,
        description="Overrides for well-known folders, keyed by search path name",
    )

    @field_validator("home", "current_directory", "temporary_directory")
    @classmethod
    def validate_folder_path(cls, v: str | None) -> str | None:
        """Require absolute folder paths and normalize their trailing separator."""
        if v is None:
            return None
        if not v.startswith("/"):
            raise ValueError(f"Folder path must be absolute: {v}")
        return as_folder_path(v)

    @field_validator("search_paths")
    @classmethod
    def validate_search_paths(cls, v: dict[str, str]) -> dict[str, str]:
        for name, path in v.items():
            if not path.startswith("/"):
                raise ValueError(f"Search path {name} must be absolute: {path}")
        return {name: as_folder_path(path) for name, path in v.items()}

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        env_file: str | Path | None = None,
    ) -> "BackendConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            env_file: Optional dotenv file loaded into ``os.environ`` first.
                Variables that are already set take precedence.

        Returns:
            Config with ``HOME``, ``TMPDIR`` and the process working directory.
        """
        if env_file is not None:
            load_dotenv(env_file)

        env = os.environ if environ is None else environ
        home = env.get("HOME") or None
        temporary = env.get("TMPDIR") or tempfile.gettempdir()
        search_paths = {
            name.removeprefix("TYPEDPATHS_").removesuffix("_DIR").lower(): value
            for name, value in env.items()
            if name.startswith("TYPEDPATHS_") and name.endswith("_DIR") and value
        }

        return cls(
            home=home,
            current_directory=os.getcwd(),
            temporary_directory=temporary,
            search_paths=search_paths,
        )
