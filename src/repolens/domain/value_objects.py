"""Value objects: self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from repolens.domain.exceptions import InvalidReferenceError

_IDENTIFIER_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")
_SHORTHAND_RE = re.compile(r"^(?P<owner>[A-Za-z0-9_.\-]+)/(?P<name>[A-Za-z0-9_.\-]+)$")
_USERNAME_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9\-]{0,38})$")


def _strip_git_suffix(name: str) -> str:
    return name[: -len(".git")] if name.endswith(".git") else name


@dataclass(frozen=True, slots=True)
class RepoRef:
    """Validated ``owner/name`` pair for a hosted repository.

    Accepts ``owner/name`` shorthand or any URL whose path has at least two
    segments (``https://github.com/psf/requests.git``,
    ``github.com/psf/requests/tree/main``).  The scheme is optional and a
    trailing ``.git`` is dropped.
    """

    owner: str
    name: str

    @classmethod
    def from_string(cls, text: str | None) -> RepoRef:
        """Parse and validate a free-form repository reference."""
        raw = (text or "").strip()
        if not raw:
            raise InvalidReferenceError("Repository reference must not be empty.")

        match = _SHORTHAND_RE.match(raw)
        if match:
            owner, name = match["owner"], match["name"]
        else:
            owner, name = cls._segments_from_url(raw)

        name = _strip_git_suffix(name)
        if not (_IDENTIFIER_RE.match(owner) and _IDENTIFIER_RE.match(name)):
            raise InvalidReferenceError(
                f"Invalid repository reference: '{raw}'. "
                "Expected 'owner/repo' or https://github.com/<owner>/<repo>"
            )
        return cls(owner=owner, name=name)

    @staticmethod
    def _segments_from_url(raw: str) -> tuple[str, str]:
        candidate = raw if "://" in raw else f"https://{raw}"
        try:
            parts = [p for p in urlsplit(candidate).path.split("/") if p]
        except ValueError as exc:
            raise InvalidReferenceError(f"Invalid repository URL: '{raw}'.") from exc
        if len(parts) < 2:
            raise InvalidReferenceError(
                f"Invalid repository reference: '{raw}'. "
                "The URL path must contain an owner and a repository name."
            )
        return parts[0], parts[1]

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class GitHubUsername:
    """Validated GitHub login."""

    value: str

    @classmethod
    def from_string(cls, text: str | None) -> GitHubUsername:
        raw = (text or "").strip()
        if not raw:
            raise InvalidReferenceError("Username required.")
        if not _USERNAME_RE.match(raw):
            raise InvalidReferenceError(f"Invalid GitHub username: '{raw}'.")
        return cls(value=raw)

    def __str__(self) -> str:
        return self.value
