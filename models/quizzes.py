from models import db


class Quiz(db.Model):
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    quiz_name = db.Column(db.String(255), nullable=False)
    class_id = db.Column(db.Integer, db.ForeignKey("classes.id"), nullable=False, index=True)
    start_date = db.Column(db.DateTime, nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes

    class_ = db.relationship("Class", back_populates="quizzes")
    questions = db.relationship("Question", back_populates="quiz", cascade="all, delete-orphan",
                                order_by="Question.position")
    responses = db.relationship("StudentResponse", back_populates="quiz", cascade="all, delete-orphan")
    results = db.relationship("StudentResult", back_populates="quiz", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Quiz {self.quiz_name}>"

    def to_summary(self):
        return {
            "quiz_id": self.id,
            "quiz_name": self.quiz_name,
            "start_date": self.start_date.isoformat(),
            "duration": self.duration,
        }

    def to_dict(self, include_answers=True):
        return {
            "id": self.id,
            "quiz_name": self.quiz_name,
            "class_id": self.class_id,
            "start_date": self.start_date.isoformat(),
            "duration": self.duration,
            "questions": [q.to_dict(include_answers=include_answers) for q in self.questions],
        }
