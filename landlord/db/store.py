"""
Progress storage

The engine never performs I/O; these stores are the persistence
collaborator the application service reads snapshots from and writes
them back to.
"""

import abc
import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from urllib.parse import quote

from landlord.exceptions import RecordNotFoundError, wrap_storage_exception
from landlord.gamification.catalog import DEFAULT_CATALOG
from landlord.models.achievement import Achievement, AchievementRule
from landlord.models.user import UserProgress

logger = logging.getLogger(__name__)


class ProgressStore(abc.ABC):
    """Storage interface for user progress and earned achievements"""

    def __init__(self, catalog: Optional[Sequence[AchievementRule]] = None):
        self._catalog = list(catalog) if catalog is not None else list(DEFAULT_CATALOG)

    async def load_achievement_catalog(self) -> List[AchievementRule]:
        """Static achievement rules, cacheable for the process lifetime"""
        return list(self._catalog)

    @abc.abstractmethod
    async def load_user_progress(self, user_id: str) -> UserProgress:
        """Raises RecordNotFoundError for unknown users"""

    @abc.abstractmethod
    async def save_user_progress(
        self,
        user_id: str,
        progress: UserProgress,
        new_achievements: Sequence[Achievement] = ()
    ) -> None:
        """
        Write the snapshot and any newly earned achievements together.

        Either both are stored or neither is. Raises PersistenceError on
        storage failure.
        """

    @abc.abstractmethod
    async def user_exists(self, user_id: str) -> bool:
        ...

    @abc.abstractmethod
    async def delete_user_progress(self, user_id: str) -> None:
        ...

    @abc.abstractmethod
    async def add_achievements(self, user_id: str, achievements: List[Achievement]) -> None:
        ...

    @abc.abstractmethod
    async def list_achievements(self, user_id: str) -> List[Achievement]:
        ...

    async def create_user_progress(
        self,
        user_id: str,
        progress: Optional[UserProgress] = None
    ) -> UserProgress:
        """Store a fresh snapshot for a new user (existing users are kept)"""
        if await self.user_exists(user_id):
            return await self.load_user_progress(user_id)
        progress = progress or UserProgress()
        await self.save_user_progress(user_id, progress)
        logger.info(f"Created progress record for user {user_id}")
        return progress


def _not_found(user_id: str) -> RecordNotFoundError:
    return RecordNotFoundError(
        f"No progress stored for user {user_id}",
        record_type="UserProgress",
        record_id=user_id,
        user_id=user_id,
    )


class InMemoryProgressStore(ProgressStore):
    """In-process store; snapshots are serialised so callers never share instances"""

    def __init__(self, catalog: Optional[Sequence[AchievementRule]] = None):
        super().__init__(catalog)
        self._progress: Dict[str, str] = {}
        self._achievements: Dict[str, List[str]] = {}

    async def load_user_progress(self, user_id: str) -> UserProgress:
        payload = self._progress.get(user_id)
        if payload is None:
            raise _not_found(user_id)
        return UserProgress.model_validate_json(payload)

    async def save_user_progress(
        self,
        user_id: str,
        progress: UserProgress,
        new_achievements: Sequence[Achievement] = ()
    ) -> None:
        payload = progress.model_dump_json()
        achievements = self._achievements.get(user_id, []) + [a.model_dump_json() for a in new_achievements]
        self._progress[user_id] = payload
        self._achievements[user_id] = achievements
        logger.debug(f"Saved progress for user {user_id}")

    async def user_exists(self, user_id: str) -> bool:
        return user_id in self._progress

    async def delete_user_progress(self, user_id: str) -> None:
        if self._progress.pop(user_id, None) is None:
            raise _not_found(user_id)
        self._achievements.pop(user_id, None)

    async def add_achievements(self, user_id: str, achievements: List[Achievement]) -> None:
        stored = self._achievements.setdefault(user_id, [])
        stored.extend(a.model_dump_json() for a in achievements)

    async def list_achievements(self, user_id: str) -> List[Achievement]:
        return [
            Achievement.model_validate_json(payload)
            for payload in self._achievements.get(user_id, [])
        ]


class JsonFileProgressStore(ProgressStore):
    """
    One JSON document per user under a data directory

    Layout:
        <root>/users/<percent-encoded user_id>.json
        {"user_id": str, "progress": {...}, "achievements": [...]}

    Writes go to a temporary file and are moved into place atomically.
    """

    def __init__(self, root: Path, catalog: Optional[Sequence[AchievementRule]] = None):
        super().__init__(catalog)
        self.root = Path(root)
        self.users_dir = self.root / "users"

    def _path(self, user_id: str) -> Path:
        # Percent-encoding is reversible, so distinct ids never share a file
        safe_id = quote(user_id, safe="")
        return self.users_dir / f"{safe_id}.json"

    def _read(self, user_id: str) -> Optional[dict]:
        path = self._path(user_id)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def _write(self, user_id: str, document: dict) -> None:
        self.users_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(user_id)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(document), encoding="utf-8")
        os.replace(tmp_path, path)

    async def _read_document(self, user_id: str, operation: str) -> Optional[dict]:
        try:
            return await asyncio.to_thread(self._read, user_id)
        except (OSError, ValueError) as e:
            raise wrap_storage_exception(e, operation=operation, user_id=user_id)

    async def _write_document(self, user_id: str, document: dict, operation: str) -> None:
        try:
            await asyncio.to_thread(self._write, user_id, document)
        except OSError as e:
            raise wrap_storage_exception(e, operation=operation, user_id=user_id)

    async def load_user_progress(self, user_id: str) -> UserProgress:
        document = await self._read_document(user_id, "load_user_progress")
        if document is None:
            raise _not_found(user_id)
        return UserProgress.model_validate(document["progress"])

    async def save_user_progress(
        self,
        user_id: str,
        progress: UserProgress,
        new_achievements: Sequence[Achievement] = ()
    ) -> None:
        document = await self._read_document(user_id, "save_user_progress") or {
            "user_id": user_id,
            "achievements": [],
        }
        document["progress"] = progress.model_dump(mode="json")
        document.setdefault("achievements", []).extend(
            a.model_dump(mode="json") for a in new_achievements
        )
        await self._write_document(user_id, document, "save_user_progress")
        logger.debug(f"Saved progress for user {user_id} to {self._path(user_id)}")

    async def user_exists(self, user_id: str) -> bool:
        return await asyncio.to_thread(self._path(user_id).exists)

    async def delete_user_progress(self, user_id: str) -> None:
        path = self._path(user_id)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            raise _not_found(user_id)
        except OSError as e:
            raise wrap_storage_exception(e, operation="delete_user_progress", user_id=user_id)

    async def add_achievements(self, user_id: str, achievements: List[Achievement]) -> None:
        document = await self._read_document(user_id, "add_achievements")
        if document is None:
            raise _not_found(user_id)
        document.setdefault("achievements", []).extend(
            a.model_dump(mode="json") for a in achievements
        )
        await self._write_document(user_id, document, "add_achievements")

    async def list_achievements(self, user_id: str) -> List[Achievement]:
        document = await self._read_document(user_id, "list_achievements")
        if document is None:
            return []
        return [Achievement.model_validate(a) for a in document.get("achievements", [])]


def create_store(backend: str, data_path: Path) -> ProgressStore:
    """Build the configured store"""
    if backend == "json":
        logger.info(f"Using JSON file progress store at {data_path}")
        return JsonFileProgressStore(data_path)
    logger.warning("Using in-memory progress store - progress is NOT persisted across restarts")
    return InMemoryProgressStore()
