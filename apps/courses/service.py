from typing import Any, Dict, List, Optional
from loguru import logger
from framework.exceptions.errors import BusinessException, InvalidArgumentError, NotFoundError
from framework.repository.pagination import PagedList, PaginationParameters
from framework.repository.unit_of_work import UnitOfWork
from .models import Discipline, Student
from .repository import DisciplineRepository, StudentRepository

class CourseService:
    def __init__(self, uow: UnitOfWork):
        """Initialize Course Service with UnitOfWork."""
        self.uow = uow

    @property
    def disciplines(self) -> DisciplineRepository:
        return self.uow.get_repository(DisciplineRepository)

    @property
    def students(self) -> StudentRepository:
        return self.uow.get_repository(StudentRepository)

    async def list_disciplines(self, paging: PaginationParameters) -> PagedList[Discipline]:
        return await self.disciplines.get_paged(paging.page_number, paging.page_size)

    async def get_discipline(self, discipline_id: int) -> Discipline:
        discipline = await self.disciplines.get_by_id(discipline_id)
        if discipline is None:
            raise NotFoundError(f"Discipline {discipline_id} not found")
        return discipline

    async def create_discipline(self, name: str, lessons: int = 0, description: Optional[str] = None) -> Discipline:
        if await self.disciplines.get_by_name(name):
            raise BusinessException("Discipline name already registered", status_code=409, code=409)

        discipline = await self.disciplines.create(
            Discipline(name=name, lessons=lessons, description=description)
        )
        await self.uow.commit()
        logger.info(f"Discipline {name} created with id {discipline.id}")
        return discipline

    async def list_students_by_discipline(self, discipline_id: int) -> List[Student]:
        await self.get_discipline(discipline_id)
        return await self.students.get_by_discipline(discipline_id)

    async def list_students(self, paging: PaginationParameters) -> PagedList[Student]:
        return await self.students.get_paged(paging.page_number, paging.page_size)

    async def get_student(self, student_id: int) -> Student:
        student = await self.students.get(Student.id == student_id)
        if student is None:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    async def create_student(self, data: Dict[str, Any]) -> Student:
        await self.get_discipline(data["discipline_id"])
        student = await self.students.create(Student(**data))
        await self.uow.commit()
        logger.info(f"Student {student.name} enrolled in discipline {student.discipline_id}")
        return student

    async def update_student(self, student_id: int, data: Dict[str, Any]) -> Student:
        """Replace a student's data; a body id must match the path id."""
        body_id = data.pop("id", None)
        if body_id is not None and body_id != student_id:
            raise InvalidArgumentError(
                f"Body id {body_id} does not match student {student_id}",
                detail={"id": body_id},
            )
        await self.get_discipline(data["discipline_id"])

        student = await self.students.update(Student(id=student_id, **data))
        await self.uow.commit()
        logger.info(f"Student {student_id} updated")
        return student

    async def delete_student(self, student_id: int) -> Student:
        student = await self.get_student(student_id)
        await self.students.delete(student)
        await self.uow.commit()
        logger.info(f"Student {student_id} deleted")
        return student
