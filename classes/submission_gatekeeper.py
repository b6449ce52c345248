import logging
from sqlalchemy.exc import IntegrityError
from models import db
from models.quizzes import Quiz
from models.student_responses import StudentResponse
from classes.quiz_window import WindowState, quiz_window_state
from utils.errors import NotFound, QuizEnded, QuizNotStarted, AlreadySubmitted

logger = logging.getLogger(__name__)


class SubmissionGatekeeper:
    """Decides whether a student may see or submit a quiz right now."""

    @staticmethod
    def check(student_id, quiz_id, now, quiz=None):
        """Read-only admission check. Returns the quiz or raises the rejection."""
        if quiz is None:
            quiz = db.session.get(Quiz, quiz_id)
        if not quiz:
            raise NotFound("Quiz not found")

        state = quiz_window_state(quiz, now)
        if state is WindowState.ENDED:
            logger.info("Quiz %s closed for student %s", quiz.id, student_id)
            raise QuizEnded()
        if state is WindowState.NOT_STARTED:
            logger.info("Quiz %s not open yet for student %s", quiz.id, student_id)
            raise QuizNotStarted()

        if SubmissionGatekeeper.has_attempt(student_id, quiz.id):
            logger.info("Student %s already attempted quiz %s", student_id, quiz.id)
            raise AlreadySubmitted()
        return quiz

    @staticmethod
    def has_attempt(student_id, quiz_id):
        return StudentResponse.query.filter_by(student_id=student_id, quiz_id=quiz_id).first() is not None

    @staticmethod
    def claim_attempt(student_id, quiz_id, responses):
        """Insert the attempt marker inside the current transaction.

        The unique key on (student_id, quiz_id) is the final word: if a
        concurrent request got there first the flush fails and the caller
        sees AlreadySubmitted, with the session rolled back.
        """
        attempt = StudentResponse(student_id=student_id, quiz_id=quiz_id, responses=responses)
        db.session.add(attempt)
        try:
            db.session.flush()
        except IntegrityError:
            db.session.rollback()
            logger.warning("Duplicate attempt blocked for student %s on quiz %s", student_id, quiz_id)
            raise AlreadySubmitted()
        return attempt
