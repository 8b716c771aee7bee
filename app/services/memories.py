import logging
from typing import List, Optional

from fastapi import UploadFile

from app.core.errors import NotFoundError
from app.schemas.activity import ActivityType
from app.schemas.memory import PhotoMemory
from app.services.activity import record_activity
from app.services.goals import ensure_goal_access
from app.services.uploads import save_photo
from app.storage.base import Storage

logger = logging.getLogger(__name__)


def parse_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


async def list_memories(storage: Storage, user_id: str, goal_id: Optional[str] = None) -> List[PhotoMemory]:
    return await storage.get_photo_memories(user_id, goal_id)


async def upload_memory(
    storage: Storage,
    user_id: str,
    photo: UploadFile,
    caption: Optional[str] = None,
    goal_id: Optional[str] = None,
    tags: Optional[str] = None,
) -> PhotoMemory:
    goal = await ensure_goal_access(storage, goal_id, user_id) if goal_id else None
    photo_url = await save_photo(photo)

    memory = await storage.create_photo_memory(
        user_id,
        {
            "goal_id": goal.id if goal else None,
            "photo_url": photo_url,
            "caption": caption or None,
            "tags": parse_tags(tags),
        },
    )
    data = {"photoUrl": memory.photo_url, "caption": memory.caption}
    if goal:
        data["goalTitle"] = goal.title
    await record_activity(
        storage,
        ActivityType.photo_uploaded,
        user_id,
        goal_id=memory.goal_id,
        data=data,
    )
    return memory


async def delete_memory(storage: Storage, memory_id: str, user_id: str) -> None:
    memory = await storage.get_photo_memory(memory_id)
    if memory is None or memory.user_id != user_id:
        raise NotFoundError("Photo memory not found")
    # The stored file stays on disk
    await storage.delete_photo_memory(memory_id)
    logger.info("Photo memory %s deleted by %s", memory_id, user_id)
