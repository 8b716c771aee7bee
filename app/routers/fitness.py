from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.auth import get_current_user
from app.database import get_storage
from app.schemas.fitness import FitnessCreate, FitnessEntry, FitnessUpdate
from app.schemas.user import User
from app.services import fitness as fitness_service
from app.storage.base import Storage

router = APIRouter(prefix="/api/fitness", tags=["fitness"])


@router.get("/today", response_model=Optional[FitnessEntry])
async def get_today(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await fitness_service.get_today_fitness(storage, current_user.id)


@router.get("/weekly", response_model=List[FitnessEntry])
async def get_weekly(
    days: int = Query(7, ge=1, le=365),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await fitness_service.get_weekly_fitness(storage, current_user.id, days)


@router.post("", response_model=FitnessEntry)
async def create_entry(
    entry_in: FitnessCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await fitness_service.create_fitness_entry(storage, current_user.id, entry_in)


@router.put("/{entry_id}", response_model=FitnessEntry)
async def update_entry(
    entry_id: str,
    entry_in: FitnessUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return await fitness_service.update_fitness_entry(
        storage, entry_id, current_user.id, entry_in.model_dump(exclude_unset=True)
    )
