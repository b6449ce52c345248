from models import db


class Option(db.Model):
    __tablename__ = "question_options"

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey("quiz_questions.id"), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    option_text = db.Column(db.Text, nullable=False)
    is_correct = db.Column(db.Boolean, nullable=False, default=False)

    question = db.relationship("Question", back_populates="options")

    def to_dict(self, include_answers=True):
        data = {
            "id": self.id,
            "option_text": self.option_text,
        }
        if include_answers:
            data["is_correct"] = self.is_correct
        return data
