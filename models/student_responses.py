from models import db


class StudentResponse(db.Model):
    """One row per attempt; the unique key is what admits a submission."""
    __tablename__ = "student_responses"
    __table_args__ = (
        db.UniqueConstraint("student_id", "quiz_id", name="uq_student_response_attempt"),
    )

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False)
    responses = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    quiz = db.relationship("Quiz", back_populates="responses")
    student = db.relationship("User")

