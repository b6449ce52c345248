from models import db


class StudentResult(db.Model):
    __tablename__ = "student_results"
    __table_args__ = (
        db.UniqueConstraint("student_id", "quiz_id", name="uq_student_result_attempt"),
    )

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False)
    # frozen at submission time, later quiz edits do not change it
    out_of = db.Column(db.Integer, nullable=False)
    submitted_at = db.Column(db.DateTime, nullable=False)

    quiz = db.relationship("Quiz", back_populates="results")
    student = db.relationship("User")

