"""
Resolve free-form user identifiers (name, email or ID) to Todoist user IDs.

Candidates are the collaborators of every shared project the account can
see. Lookups and collaborator lists are cached for a few minutes so a bulk
operation touching many tasks only fetches them once.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from assignments.cache import DEFAULT_TTL_SECONDS, MISSING, TTLCache
from todoist.models import Collaborator
from utils.concurrency import DEFAULT_MAX_WORKERS, settle_all

logger = logging.getLogger(__name__)

ALL_COLLABORATORS_KEY = "all_collaborators"

_NUMERIC_ID = re.compile(r"^[0-9]+$")
_HEX_ID = re.compile(r"^[a-f0-9-]{8,}$", re.IGNORECASE)
_TOKEN_ID = re.compile(r"^[a-z0-9_]{6,}$", re.IGNORECASE)
_WORDLIKE = re.compile(r"^[a-z]+[\s-]", re.IGNORECASE)
_HAS_DIGIT_OR_UNDERSCORE = re.compile(r"[0-9_]")


def looks_like_user_id(value: str) -> bool:
    """
    Guess whether ``value`` is already a user ID rather than a name/email.

    Accepts all-digit strings, hyphenated hex strings of 8+ chars (UUID-ish),
    and 6+ char alphanumeric tokens containing a digit or underscore. This is
    a heuristic: a username like "jdoe_42" will be taken as an ID.
    """
    if _NUMERIC_ID.match(value):
        return True
    if _HEX_ID.match(value) and "-" in value:
        return True
    return bool(
        _TOKEN_ID.match(value)
        and not _WORDLIKE.match(value)
        and _HAS_DIGIT_OR_UNDERSCORE.search(value)
    )


@dataclass
class ResolvedUser:
    """A successfully resolved user."""

    user_id: str
    display_name: str

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "displayName": self.display_name}


def _normalize_collaborators(payload) -> list[Collaborator]:
    """Accept a bare list or a ``{"results": [...]}`` page; drop incomplete rows."""
    if isinstance(payload, list):
        raw = payload
    elif isinstance(payload, dict):
        raw = payload.get("results") or []
    else:
        raw = []

    collaborators = []
    for item in raw:
        collaborator = Collaborator.from_dict(item)
        if collaborator:
            collaborators.append(collaborator)
    return collaborators


class UserResolver:
    """
    Resolves user identifiers against project collaborators.

    Holds two caches: resolution outcomes keyed by the trimmed input, and
    collaborator lists keyed by ``project_<id>`` (plus ``all_collaborators``
    for the union across shared projects).
    """

    def __init__(
        self,
        client,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
        user_cache: Optional[TTLCache] = None,
        collaborator_cache: Optional[TTLCache] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self.client = client
        self.max_workers = max_workers
        self._user_cache = (
            user_cache if user_cache is not None else TTLCache(ttl=ttl, clock=clock)
        )
        self._collaborator_cache = (
            collaborator_cache
            if collaborator_cache is not None
            else TTLCache(ttl=ttl, clock=clock)
        )

    def resolve_user(self, identifier: Optional[str]) -> Optional[ResolvedUser]:
        """
        Resolve a name, email or ID to a user.

        Match order (case-insensitive, first collaborator in list order wins
        within a tier): exact name, exact email, name substring, email
        substring. Failed lookups are cached too, so they are not retried
        until the entry expires.

        Returns:
            ResolvedUser, or None if nothing matches or collaborators could
            not be fetched
        """
        if not identifier or not identifier.strip():
            return None

        key = identifier.strip()

        cached = self._user_cache.get(key)
        if cached is not MISSING:
            return cached

        if looks_like_user_id(key):
            result = ResolvedUser(user_id=key, display_name=key)
            self._user_cache.set(key, result)
            return result

        try:
            result = self._match_collaborator(key)
        except Exception as e:
            logger.warning(f"User resolution for '{key}' failed: {e}")
            result = None

        self._user_cache.set(key, result)
        return result

    def _match_collaborator(self, key: str) -> Optional[ResolvedUser]:
        collaborators = self._get_all_collaborators()
        if not collaborators:
            logger.debug(f"No shared-project collaborators to resolve '{key}'")
            return None

        term = key.lower()
        tiers = (
            lambda c: c.name.lower() == term,
            lambda c: c.email.lower() == term,
            lambda c: term in c.name.lower(),
            lambda c: term in c.email.lower(),
        )
        for matches in tiers:
            match = next((c for c in collaborators if matches(c)), None)
            if match:
                return ResolvedUser(user_id=match.id, display_name=match.name)

        return None

    def validate_project_collaborator(self, project_id: str, user_id: str) -> bool:
        """Check whether ``user_id`` collaborates on ``project_id``."""
        try:
            collaborators = self.get_project_collaborators(project_id)
            return any(c.id == user_id for c in collaborators)
        except Exception as e:
            logger.warning(f"Collaborator check on project {project_id} failed: {e}")
            return False

    def get_project_collaborators(self, project_id: str) -> list[Collaborator]:
        """
        Collaborators of one project.

        API failures return an empty list and are not cached, so the next
        call tries again.
        """
        cache_key = f"project_{project_id}"
        cached = self._collaborator_cache.get(cache_key)
        if cached is not MISSING:
            return cached

        try:
            payload = self.client.get_project_collaborators(project_id)
        except Exception as e:
            logger.warning(f"Failed to fetch collaborators for project {project_id}: {e}")
            return []

        collaborators = _normalize_collaborators(payload)
        self._collaborator_cache.set(cache_key, collaborators)
        return collaborators

    def _get_all_collaborators(self) -> list[Collaborator]:
        """Union of collaborators across all shared projects, deduplicated by ID."""
        cached = self._collaborator_cache.get(ALL_COLLABORATORS_KEY)
        if cached is not MISSING:
            return cached

        try:
            shared_projects = [p for p in self._list_projects() if p.is_shared]
        except Exception as e:
            logger.warning(f"Failed to list projects for collaborator lookup: {e}")
            return []

        collaborators: list[Collaborator] = []
        seen: set[str] = set()

        outcomes = settle_all(
            lambda project: self.get_project_collaborators(project.id),
            shared_projects,
            max_workers=self.max_workers,
        )
        for project, outcome in zip(shared_projects, outcomes):
            if not outcome.ok:
                logger.debug(f"Skipping project {project.id}: {outcome.error}")
                continue
            for collaborator in outcome.value:
                if collaborator.id not in seen:
                    seen.add(collaborator.id)
                    collaborators.append(collaborator)

        self._collaborator_cache.set(ALL_COLLABORATORS_KEY, collaborators)
        return collaborators

    def _list_projects(self):
        projects = []
        cursor = None
        while True:
            page = self.client.get_projects(cursor=cursor)
            projects.extend(page.results)
            cursor = page.next_cursor
            if not cursor:
                return projects

    def clear_cache(self) -> None:
        """Drop every cached resolution and collaborator list."""
        self._user_cache.clear()
        self._collaborator_cache.clear()
