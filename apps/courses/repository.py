"""Courses module repository implementations."""

from typing import List, Optional
from framework.repository.base import BaseRepository
from .models import Discipline, Student


class DisciplineRepository(BaseRepository[Discipline]):
    """Discipline repository."""

    model = Discipline

    async def get_by_name(self, name: str) -> Optional[Discipline]:
        return await self.get(name=name)


class StudentRepository(BaseRepository[Student]):
    """Student repository."""

    model = Student

    async def get_by_discipline(self, discipline_id: int) -> List[Student]:
        """Students enrolled in a discipline (id order)."""
        return await self.find_all(Student.discipline_id == discipline_id)
