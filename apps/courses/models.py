from typing import Optional
from sqlmodel import SQLModel, Field

class Discipline(SQLModel, table=True):
    __tablename__ = "disciplines"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    lessons: int = Field(default=0, description="Number of lessons")
    description: Optional[str] = Field(default=None, max_length=300)

class Student(SQLModel, table=True):
    __tablename__ = "students"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=100)
    grade: float = Field(default=0.0)
    discipline_id: int = Field(foreign_key="disciplines.id", index=True)
