from .user import User
from .department import Department
from .course import Course
from .module import Module, module_prerequisites
from .student import Student
from .enrollment import Enrollment
__all__ = ["User", "Department", "Course", "Module", "module_prerequisites", "Student", "Enrollment"]
