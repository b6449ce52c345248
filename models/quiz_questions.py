from models import db


class Question(db.Model):
    __tablename__ = "quiz_questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    question_text = db.Column(db.Text, nullable=False)
    is_multiple_choice = db.Column(db.Boolean, nullable=False, default=False)

    quiz = db.relationship("Quiz", back_populates="questions")
    options = db.relationship("Option", back_populates="question", cascade="all, delete-orphan",
                              order_by="Option.position")

    @property
    def correct_option_ids(self):
        """Ids of the options flagged correct, in stored order."""
        return [option.id for option in self.options if option.is_correct]

    def to_dict(self, include_answers=True):
        return {
            "id": self.id,
            "question_text": self.question_text,
            "is_multiple_choice": self.is_multiple_choice,
            "options": [option.to_dict(include_answers=include_answers) for option in self.options],
        }
