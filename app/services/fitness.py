from typing import Any, Dict, List, Optional

from app.core.errors import ConflictError, NotFoundError
from app.schemas.fitness import FitnessCreate, FitnessEntry
from app.storage.base import Storage


async def get_today_fitness(storage: Storage, user_id: str) -> Optional[FitnessEntry]:
    return await storage.get_today_fitness(user_id)


async def get_weekly_fitness(storage: Storage, user_id: str, days: int = 7) -> List[FitnessEntry]:
    return await storage.get_fitness_data(user_id, days)


async def create_fitness_entry(storage: Storage, user_id: str, payload: FitnessCreate) -> FitnessEntry:
    if await storage.get_today_fitness(user_id):
        raise ConflictError("Fitness data already logged today")
    return await storage.create_fitness_entry(user_id, payload.model_dump())


async def update_fitness_entry(storage: Storage, entry_id: str, user_id: str, updates: Dict[str, Any]) -> FitnessEntry:
    entry = await storage.get_fitness_entry(entry_id)
    if entry is None or entry.user_id != user_id:
        raise NotFoundError("Fitness entry not found")
    # Counters cannot be cleared, only overwritten
    updates = {k: v for k, v in updates.items() if v is not None or k in ("heart_rate", "weight", "notes")}
    if not updates:
        return entry
    return await storage.update_fitness_entry(entry_id, updates)
