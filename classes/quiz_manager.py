import logging
from models import db
from models.quizzes import Quiz
from models.quiz_questions import Question
from models.question_options import Option
from classes.validators import validate_duration, validate_future, validate_length
from utils.errors import NotFound, ValidationFailed
from utils.helpers import clean_text, parse_datetime, utcnow

logger = logging.getLogger(__name__)


def build_questions(questions):
    """Turn a request's question list into Question/Option rows."""
    if not isinstance(questions, list):
        raise ValidationFailed("'questions' must be a list.")

    built = []
    for q_index, question in enumerate(questions):
        if not isinstance(question, dict):
            raise ValidationFailed("Each question must be an object.")
        options = question.get("options")
        if not isinstance(options, list) or not options:
            raise ValidationFailed("Each question must have a non-empty 'options' list.")
        is_multiple_choice = question.get("is_multiple_choice", False)
        if not isinstance(is_multiple_choice, bool):
            raise ValidationFailed("'is_multiple_choice' must be a boolean.")

        new_question = Question(
            position=q_index,
            question_text=clean_text(question.get("question_text"), "question_text"),
            is_multiple_choice=is_multiple_choice,
        )
        for o_index, option in enumerate(options):
            if not isinstance(option, dict):
                raise ValidationFailed("Each option must be an object.")
            is_correct = option.get("is_correct")
            if not isinstance(is_correct, bool):
                raise ValidationFailed("Each option needs a boolean 'is_correct'.")
            new_question.options.append(Option(
                position=o_index,
                option_text=clean_text(option.get("option_text"), "option_text"),
                is_correct=is_correct,
            ))
        built.append(new_question)
    return built


class QuizManager:

    @staticmethod
    def get_for_class(class_id, quiz_id):
        quiz = db.session.get(Quiz, quiz_id)
        if not quiz or quiz.class_id != class_id:
            raise NotFound("Quiz not found")
        return quiz

    @staticmethod
    def create_quiz(class_id, data, now=None):
        now = now or utcnow()
        quiz_name = clean_text(data.get("quiz_name"), "quiz_name")
        validate_length("quiz_name", quiz_name, 255)
        start_date = parse_datetime(data.get("start_date"))
        validate_future(start_date, now)
        duration = data.get("duration")
        validate_duration(duration)

        quiz = Quiz(
            quiz_name=quiz_name,
            class_id=class_id,
            start_date=start_date,
            duration=duration,
            questions=build_questions(data.get("questions", [])),
        )
        db.session.add(quiz)
        db.session.commit()
        logger.info("Created quiz %s in class %s", quiz.id, class_id)
        return quiz

    @staticmethod
    def update_quiz(quiz, data, now=None):
        """Update only the provided fields; supplied questions replace the old set."""
        now = now or utcnow()
        if "quiz_name" in data:
            quiz.quiz_name = clean_text(data.get("quiz_name"), "quiz_name")
            validate_length("quiz_name", quiz.quiz_name, 255)
        if "start_date" in data:
            start_date = parse_datetime(data.get("start_date"))
            validate_future(start_date, now)
            quiz.start_date = start_date
        if "duration" in data:
            validate_duration(data.get("duration"))
            quiz.duration = data["duration"]
        if "questions" in data:
            questions = build_questions(data.get("questions"))
            quiz.questions.clear()
            db.session.flush()
            quiz.questions.extend(questions)

        db.session.commit()
        logger.info("Updated quiz %s", quiz.id)
        return quiz

    @staticmethod
    def delete_quiz(quiz):
        db.session.delete(quiz)
        db.session.commit()
        logger.info("Deleted quiz %s", quiz.id)
