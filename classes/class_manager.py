import logging
from models import db
from models.classes import Class
from models.users import User, STUDENT
from utils.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)


class ClassManager:

    @staticmethod
    def get_class(class_id):
        existing_class = db.session.get(Class, class_id)
        if not existing_class:
            raise NotFound("Class not found")
        return existing_class

    @staticmethod
    def get_owned_class(class_id, principal):
        existing_class = ClassManager.get_class(class_id)
        if not existing_class.is_owned_by(principal.id):
            raise Forbidden("User is not the teacher of this class")
        return existing_class

    @staticmethod
    def get_visible_class(class_id, principal):
        """The class, if the caller owns it or is enrolled in it."""
        existing_class = ClassManager.get_class(class_id)
        if not (existing_class.is_owned_by(principal.id) or existing_class.has_student(principal.id)):
            raise Forbidden("User is not authorized to access this class")
        return existing_class

    @staticmethod
    def classes_for(principal):
        if principal.role == STUDENT:
            return (
                Class.query
                .filter(Class.students.any(User.id == principal.id))
                .order_by(Class.id)
                .all()
            )
        return Class.query.filter_by(teacher_id=principal.id).order_by(Class.id).all()

    @staticmethod
    def get_student(student_id):
        student = db.session.get(User, student_id) if student_id is not None else None
        if not student or student.role != STUDENT:
            raise NotFound("Student not found")
        return student

    @staticmethod
    def enroll_student(existing_class, student):
        """Add a student to the roster. Returns False if already enrolled."""
        if existing_class.has_student(student.id):
            return False
        existing_class.students.append(student)
        db.session.commit()
        logger.info("Student %s joined class %s", student.id, existing_class.id)
        return True

    @staticmethod
    def unenroll_student(existing_class, student_id):
        student = next((s for s in existing_class.students if s.id == student_id), None)
        if not student:
            raise NotFound("Student not found in the class")
        existing_class.students.remove(student)
        db.session.commit()
        logger.info("Student %s removed from class %s", student_id, existing_class.id)
