from models import db

# Composite primary key keeps a student in a class at most once.
class_students = db.Table(
    "class_students",
    db.Column("class_id", db.Integer, db.ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
    db.Column("student_id", db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Class(db.Model):
    __tablename__ = "classes"

    id = db.Column(db.Integer, primary_key=True)
    class_name = db.Column(db.String(255), nullable=False)
    teacher_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    teacher = db.relationship("User", back_populates="owned_classes")
    students = db.relationship("User", secondary=class_students, lazy="select",
                               backref=db.backref("joined_classes", lazy="select"))
    # Quizzes live in their own table; this is a query over Quiz.class_id, not a copy.
    quizzes = db.relationship("Quiz", back_populates="class_", cascade="all, delete-orphan",
                              order_by="Quiz.start_date")

    def is_owned_by(self, user_id):
        return self.teacher_id == user_id

    def has_student(self, student_id):
        return any(student.id == student_id for student in self.students)

    def __repr__(self):
        return f"<Class {self.class_name} (Teacher ID {self.teacher_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "class_name": self.class_name,
            "teacher_id": self.teacher_id,
            "students": [student.id for student in self.students],
            "quizzes": [quiz.id for quiz in self.quizzes],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
