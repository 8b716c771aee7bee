from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from app.core.auth import get_current_user
from app.database import get_storage
from app.schemas.goal import DeleteResponse
from app.schemas.memory import PhotoMemory
from app.schemas.user import User
from app.services import memories as memory_service
from app.storage.base import Storage

router = APIRouter(prefix="/api/memories", tags=["memories"])


@router.get("", response_model=List[PhotoMemory])
async def list_memories(
    goal_id: Optional[str] = Query(None, alias="goalId"),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await memory_service.list_memories(storage, current_user.id, goal_id)


@router.post("/upload", response_model=PhotoMemory)
async def upload_memory(
    photo: UploadFile = File(...),
    caption: Optional[str] = Form(None),
    goal_id: Optional[str] = Form(None, alias="goalId"),
    tags: Optional[str] = Form(None),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await memory_service.upload_memory(
        storage, current_user.id, photo, caption=caption, goal_id=goal_id, tags=tags
    )


@router.delete("/{memory_id}", response_model=DeleteResponse)
async def delete_memory(
    memory_id: str,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    await memory_service.delete_memory(storage, memory_id, current_user.id)
    return DeleteResponse(success=True)
