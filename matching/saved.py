"""Saved-job sets per seeker."""

from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Set

from pydantic import BaseModel, ConfigDict

from .intents import ToggleSave


class SaveToggle(BaseModel):
    model_config = ConfigDict(frozen=True)

    saved: bool
    intent: Optional[ToggleSave] = None


class SavedSetManager:
    """
    Tracks which jobs each seeker saved.

    Instances are owned by the caller and seeded from the store; nothing is
    shared between callers. Operations cannot fail.
    """

    def __init__(self, initial: Optional[Mapping[str, Iterable[str]]] = None):
        self._sets: Dict[str, Set[str]] = {
            seeker_id: set(job_ids) for seeker_id, job_ids in (initial or {}).items()
        }

    def load(self, seeker_id: str, job_ids: Iterable[str]) -> None:
        self._sets[seeker_id] = set(job_ids)

    def saved_set(self, seeker_id: str) -> FrozenSet[str]:
        return frozenset(self._sets.get(seeker_id, ()))

    def is_saved(self, seeker_id: str, job_id: str) -> bool:
        return job_id in self._sets.get(seeker_id, ())

    def toggle(self, seeker_id: str, job_id: str) -> SaveToggle:
        """Flip membership of a job in the seeker's saved set."""
        if self.is_saved(seeker_id, job_id):
            return self.unsave(seeker_id, job_id)
        return self.save(seeker_id, job_id)

    def save(self, seeker_id: str, job_id: str) -> SaveToggle:
        saved = self._sets.setdefault(seeker_id, set())
        if job_id in saved:
            return SaveToggle(saved=True)
        saved.add(job_id)
        return SaveToggle(
            saved=True, intent=ToggleSave(seeker_id=seeker_id, job_id=job_id, saved=True)
        )

    def unsave(self, seeker_id: str, job_id: str) -> SaveToggle:
        saved = self._sets.get(seeker_id)
        if not saved or job_id not in saved:
            return SaveToggle(saved=False)
        saved.discard(job_id)
        return SaveToggle(
            saved=False, intent=ToggleSave(seeker_id=seeker_id, job_id=job_id, saved=False)
        )
