import logging
from models import db
from models.student_results import StudentResult
from classes.submission_gatekeeper import SubmissionGatekeeper
from utils.errors import ApiError, InternalFailure, MalformedResponse
from utils.helpers import utcnow

logger = logging.getLogger(__name__)


def _ids_equal(a, b):
    # ids arrive from JSON as ints or strings; compare by their text form
    return str(a) == str(b)


def _normalise_id(value):
    """Accept ints, non-empty strings and integral floats (1.0 -> 1)."""
    if isinstance(value, bool) or value is None or value == "":
        raise MalformedResponse()
    if isinstance(value, float):
        if not value.is_integer():
            raise MalformedResponse()
        return int(value)
    if not isinstance(value, (int, str)):
        raise MalformedResponse()
    return value


def validate_responses(responses):
    """Check the whole batch before anything is written.

    Returns a normalised copy: ``[{"question_id": ..., "selected_options": [...]}]``.
    """
    if not isinstance(responses, list):
        raise MalformedResponse("'responses' must be a list")

    cleaned = []
    seen = set()
    for response in responses:
        if not isinstance(response, dict):
            raise MalformedResponse()
        question_id = _normalise_id(response.get("question_id"))
        selected_options = response.get("selected_options")
        if not isinstance(selected_options, list):
            raise MalformedResponse()
        if str(question_id) in seen:
            raise MalformedResponse("Each question may be answered only once")
        seen.add(str(question_id))
        cleaned.append({
            "question_id": question_id,
            "selected_options": [_normalise_id(option_id) for option_id in selected_options],
        })
    return cleaned


def correct_answer_sets(quiz):
    """Correct option ids per question id, in the order the options are stored."""
    return [
        {"question_id": question.id, "selected_options": question.correct_option_ids}
        for question in quiz.questions
    ]


def is_correct_answer(correct_options, selected_options):
    """Element-by-element comparison; the same ids in another order do not match."""
    if len(correct_options) != len(selected_options):
        return False
    return all(_ids_equal(expected, given) for expected, given in zip(correct_options, selected_options))


def score_responses(quiz, responses):
    """Pure scoring: returns ``(score, out_of)`` for already validated responses."""
    correct = correct_answer_sets(quiz)
    scored = set()
    for response in responses:
        match = next((c for c in correct if _ids_equal(c["question_id"], response["question_id"])), None)
        if match is None or match["question_id"] in scored:
            continue
        if is_correct_answer(match["selected_options"], response["selected_options"]):
            scored.add(match["question_id"])
    score = len(scored)
    return score, len(quiz.questions)


def rescore(student_response):
    """Recompute a stored attempt against the quiz as it is now."""
    return score_responses(student_response.quiz, student_response.responses)


class ScoringEngine:

    @staticmethod
    def submit(student_id, quiz_id, responses, now=None):
        """Admit, record and score one attempt.

        The attempt marker and its result are written in one transaction, so
        either both exist afterwards or neither does.
        """
        now = now or utcnow()
        quiz = SubmissionGatekeeper.check(student_id, quiz_id, now)
        cleaned = validate_responses(responses)

        try:
            SubmissionGatekeeper.claim_attempt(student_id, quiz.id, cleaned)
            score, out_of = score_responses(quiz, cleaned)
            result = StudentResult(
                student_id=student_id,
                quiz_id=quiz.id,
                score=score,
                out_of=out_of,
                submitted_at=now,
            )
            db.session.add(result)
            db.session.commit()
        except ApiError:
            db.session.rollback()
            raise
        except Exception:
            db.session.rollback()
            logger.exception("Failed to store attempt for student %s on quiz %s", student_id, quiz_id)
            raise InternalFailure("Could not store the quiz submission")

        logger.info("Student %s scored %s/%s on quiz %s", student_id, score, out_of, quiz.id)
        return result
