"""
File-backed persistence for user profiles.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from .catalog_loader import load_profiles, profile_to_dict
from .profile import IdFactory, UserProfile, create_default_profile, uuid_id_factory

logger = logging.getLogger(__name__)


class ProfileStore:
    """
    Load and save the full set of user profiles as one JSON document.

    The simulation engine never touches the store; hosts load a profile,
    run it, and save edits back here.

    Args:
        path: JSON file holding a list of profiles
        id_factory: Identity generator for profiles created by the store
    """

    def __init__(self, path: str | Path, *, id_factory: IdFactory = uuid_id_factory):
        self.path = Path(path)
        self.id_factory = id_factory

    def load(self, *, today: date | str) -> list[UserProfile]:
        """
        Read all profiles.

        A missing file yields a single demo profile anchored on ``today``.
        A malformed file raises ProfileError.
        """
        if not self.path.exists():
            logger.info("No profile store at %s; starting with the demo profile", self.path)
            return [create_default_profile(today=today, id_factory=self.id_factory)]
        return load_profiles(self.path, format="json", id_factory=self.id_factory)

    def save(self, profiles: list[UserProfile]) -> None:
        """Overwrite the store with ``profiles``."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [profile_to_dict(p) for p in profiles]
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            tmp.replace(self.path)
        finally:
            tmp.unlink(missing_ok=True)
        logger.debug("Saved %d profiles to %s", len(profiles), self.path)

    def get(self, profile_id: str, *, today: date | str) -> UserProfile | None:
        """Return the profile with ``profile_id`` or None."""
        return next(
            (p for p in self.load(today=today) if p.id == profile_id), None
        )
