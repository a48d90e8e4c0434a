"""
Weekly wellness quests with progress kept in the KV store.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from mindpal.models.schemas import Quest, QuestBoard
from mindpal.services.kv_store import KVStore

logger = logging.getLogger(__name__)

QUEST_PERIOD = timedelta(days=7)

QUESTS: dict[str, dict[str, Any]] = {
    "1": {
        "title": "Gratitude Master",
        "description": "Write 3 things you're grateful for",
        "emoji": "🙏",
        "total": 3,
        "reward": 50,
        "difficulty": "easy",
    },
    "2": {
        "title": "Mindful Moments",
        "description": "Complete 5 minutes of breathing exercises",
        "emoji": "🧘",
        "total": 1,
        "reward": 75,
        "difficulty": "medium",
    },
    "3": {
        "title": "Mood Tracker",
        "description": "Log your mood for 7 consecutive days",
        "emoji": "📊",
        "total": 7,
        "reward": 150,
        "difficulty": "hard",
    },
    "4": {
        "title": "Self-Care Sunday",
        "description": "Complete a self-care activity",
        "emoji": "💆",
        "total": 1,
        "reward": 100,
        "difficulty": "medium",
    },
}


class QuestIncompleteError(ValueError):
    """The quest's progress hasn't reached its total yet."""


def _fresh_quests() -> dict[str, dict[str, Any]]:
    return {
        quest_id: {"progress": 0, "completed": False, "completed_at": None}
        for quest_id in QUESTS
    }


class QuestService:
    """Read and advance a user's quest progress."""

    def __init__(self, kv: KVStore) -> None:
        self.kv = kv

    @staticmethod
    def _key(user_id: str) -> str:
        return f"quests:{user_id}"

    async def _load(self, user_id: str, now: datetime | None = None) -> dict[str, Any]:
        """Load progress, creating it on first use and rolling it over weekly."""
        now = now or datetime.now(timezone.utc)
        doc = await self.kv.get(self._key(user_id))

        if doc is None:
            doc = {"quests": _fresh_quests(), "weekly_streak": 0, "last_reset": now.isoformat()}
            await self.kv.set(self._key(user_id), doc)
            return doc

        last_reset = datetime.fromisoformat(doc["last_reset"])
        if now - last_reset >= QUEST_PERIOD:
            all_done = all(
                doc["quests"].get(quest_id, {}).get("completed") for quest_id in QUESTS
            )
            doc = {
                "quests": _fresh_quests(),
                "weekly_streak": doc.get("weekly_streak", 0) + 1 if all_done else 0,
                "last_reset": now.isoformat(),
            }
            await self.kv.set(self._key(user_id), doc)
            logger.info(f"🔄 Weekly quest reset for {user_id} (streak={doc['weekly_streak']})")

        # Quests added to the catalog after this doc was created
        for quest_id, state in _fresh_quests().items():
            doc["quests"].setdefault(quest_id, state)

        return doc

    def _board(self, doc: dict[str, Any]) -> QuestBoard:
        return QuestBoard(
            quests=[
                Quest(id=quest_id, **definition, **doc["quests"][quest_id])
                for quest_id, definition in QUESTS.items()
            ],
            weekly_streak=doc["weekly_streak"],
            last_reset=doc["last_reset"],
        )

    async def get_board(self, user_id: str, now: datetime | None = None) -> QuestBoard:
        return self._board(await self._load(user_id, now))

    async def record_progress(self, user_id: str, quest_id: str, amount: int = 1) -> QuestBoard:
        """Advance a quest, capped at its total."""
        if quest_id not in QUESTS:
            raise ValueError(f"Unknown quest: {quest_id}")

        doc = await self._load(user_id)
        state = doc["quests"][quest_id]
        state["progress"] = min(QUESTS[quest_id]["total"], state["progress"] + amount)

        await self.kv.set(self._key(user_id), doc)
        return self._board(doc)

    async def complete_quest(self, user_id: str, quest_id: str) -> tuple[int, QuestBoard]:
        """Mark a quest complete and return its coin reward."""
        if quest_id not in QUESTS:
            raise ValueError(f"Unknown quest: {quest_id}")

        doc = await self._load(user_id)
        state = doc["quests"][quest_id]

        if state["completed"]:
            raise ValueError("Quest already completed")

        total = QUESTS[quest_id]["total"]
        if state["progress"] < total:
            raise QuestIncompleteError(
                f"Quest not finished yet ({state['progress']}/{total})"
            )

        state["completed"] = True
        state["completed_at"] = datetime.now(timezone.utc).isoformat()

        await self.kv.set(self._key(user_id), doc)
        logger.info(f"✅ {user_id} completed quest {quest_id}")
        return QUESTS[quest_id]["reward"], self._board(doc)

    async def reopen_quest(self, user_id: str, quest_id: str) -> None:
        """Undo a completion whose reward could not be paid out."""
        doc = await self._load(user_id)
        state = doc["quests"][quest_id]
        state["completed"] = False
        state["completed_at"] = None

        await self.kv.set(self._key(user_id), doc)
        logger.warning(f"⚠️  Reopened quest {quest_id} for {user_id}")
