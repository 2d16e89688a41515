from fastapi import APIRouter, Depends
from typing import Optional
from pydantic import BaseModel, Field
from framework.dependencies import get_pagination, get_uow
from framework.repository.pagination import PaginationParameters
from framework.repository.unit_of_work import UnitOfWork
from framework.response import ResponseModel
from ..service import CourseService

router = APIRouter()

class DisciplineSchema(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    lessons: int = Field(default=0, ge=0)
    description: Optional[str] = Field(default=None, max_length=300)

class StudentSchema(BaseModel):
    id: Optional[int] = None
    name: str = Field(min_length=1, max_length=100)
    grade: float = Field(default=0.0, ge=0, le=10)
    discipline_id: int

def get_course_service(uow: UnitOfWork = Depends(get_uow)) -> CourseService:
    """Dependency: create CourseService."""
    return CourseService(uow)

@router.get("/disciplines")
async def list_disciplines(
    paging: PaginationParameters = Depends(get_pagination),
    service: CourseService = Depends(get_course_service)
):
    return ResponseModel.page(await service.list_disciplines(paging))

@router.post("/disciplines")
async def create_discipline(data: DisciplineSchema, service: CourseService = Depends(get_course_service)):
    discipline = await service.create_discipline(data.name, data.lessons, data.description)
    return ResponseModel.success(data=discipline.model_dump())

@router.get("/disciplines/{discipline_id}/students")
async def list_discipline_students(discipline_id: int, service: CourseService = Depends(get_course_service)):
    """All students enrolled in a discipline."""
    students = await service.list_students_by_discipline(discipline_id)
    return ResponseModel.success(data=[student.model_dump() for student in students])

@router.get("/students")
async def list_students(
    paging: PaginationParameters = Depends(get_pagination),
    service: CourseService = Depends(get_course_service)
):
    return ResponseModel.page(await service.list_students(paging))

@router.get("/students/{student_id}")
async def get_student(student_id: int, service: CourseService = Depends(get_course_service)):
    student = await service.get_student(student_id)
    return ResponseModel.success(data=student.model_dump())

@router.post("/students")
async def create_student(data: StudentSchema, service: CourseService = Depends(get_course_service)):
    student = await service.create_student(data.model_dump(exclude={"id"}))
    return ResponseModel.success(data=student.model_dump())

@router.put("/students/{student_id}")
async def update_student(
    student_id: int,
    data: StudentSchema,
    service: CourseService = Depends(get_course_service)
):
    student = await service.update_student(student_id, data.model_dump())
    return ResponseModel.success(data=student.model_dump())

@router.delete("/students/{student_id}")
async def delete_student(student_id: int, service: CourseService = Depends(get_course_service)):
    student = await service.delete_student(student_id)
    return ResponseModel.success(data=student.model_dump())
