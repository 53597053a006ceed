"""Runtime settings for create-kapp."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Settings:
    """
    Where template archives are fetched from.

    Attributes:
        owner: GitHub account that owns the template repository.
        branch: Branch whose snapshot archive is downloaded.
        host: Archive host name.
        timeout: Seconds to wait on the archive host before giving up.
    """

    owner: str = "kars1996"
    branch: str = "master"
    host: str = "github.com"
    timeout: float = 30.0

    def __post_init__(self) -> None:
        for name in ("owner", "branch", "host"):
            if not getattr(self, name).strip():
                raise ValueError(f"{name} must be a non-empty string.")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}.")
