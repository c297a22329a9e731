"""
ListerConfig — where the flake lives and how to talk to nix.

Built once at startup by ``nixlist.core.config.loader.load_config`` and
passed explicitly to every service call.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_FLAKE_DIR = Path.home() / ".config" / "nix"


class ListerConfig(BaseModel):
    """Tool configuration."""

    flake_dir: Path = Field(default_factory=lambda: DEFAULT_FLAKE_DIR)
    configuration_kind: str = "darwinConfigurations"
    profiles_dir: Path = Path("/nix/var/nix/profiles")
    profile_name: str = "system"
    system_artifact_name: str = "darwin-system"
    secondary_manager: str = "brew"
    command_timeout: int = Field(default=300, gt=0)

    @field_validator("flake_dir", "profiles_dir", mode="before")
    @classmethod
    def _expand_user(cls, value: object) -> object:
        if isinstance(value, str):
            return Path(value).expanduser()
        if isinstance(value, Path):
            return value.expanduser()
        return value

    def attribute(self, config_name: str) -> str:
        """Flake attribute path of the configuration's system packages."""
        return f'{self.configuration_kind}."{config_name}".config.environment.systemPackages'

    def flake_ref(self, config_name: str) -> str:
        """Full flake reference passed to ``nix eval``."""
        return f"{self.flake_dir}#{self.attribute(config_name)}"

    @property
    def profile_link(self) -> Path:
        """The active profile symlink, e.g. ``/nix/var/nix/profiles/system``."""
        return self.profiles_dir / self.profile_name

    def generation_link(self, number: int) -> Path:
        """Link for a numbered generation, e.g. ``system-42-link``."""
        return self.profiles_dir / f"{self.profile_name}-{number}-link"
