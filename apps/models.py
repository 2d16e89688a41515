"""
Model registration: import all table models here so they are present in
SQLModel.metadata before tables are created.
When adding/removing apps, add/remove the corresponding imports here.
"""
from apps.catalog.models import Category, Product
from apps.courses.models import Discipline, Student

__all__ = ["Category", "Product", "Discipline", "Student"]
