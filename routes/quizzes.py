from flask import Blueprint, request, jsonify, make_response
from models.users import TEACHER, STUDENT
from classes.class_manager import ClassManager
from classes.quiz_manager import QuizManager
from classes.result_aggregator import ResultAggregator
from classes.scoring_engine import ScoringEngine
from classes.submission_gatekeeper import SubmissionGatekeeper
from utils.errors import Forbidden, MalformedResponse
from utils.helpers import get_json_body, utcnow
from utils.utils import login_required, role_required

quiz_bp = Blueprint("quizzes", __name__)


#                                                         QUIZZES
#_____________________________________________________________________________________________________________
# CREATE a quiz
@quiz_bp.route("/<int:class_id>/quizzes", methods=["POST"])
@login_required
@role_required(TEACHER)
def create_quiz(class_id, principal):
    ClassManager.get_owned_class(class_id, principal)
    quiz = QuizManager.create_quiz(class_id, get_json_body(request))
    return jsonify({"message": "Quiz created successfully", "quiz": quiz.to_dict()}), 201


# EDIT a quiz
@quiz_bp.route("/<int:class_id>/quizzes/<int:quiz_id>", methods=["PATCH"])
@login_required
@role_required(TEACHER)
def update_quiz(class_id, quiz_id, principal):
    ClassManager.get_owned_class(class_id, principal)
    quiz = QuizManager.get_for_class(class_id, quiz_id)
    quiz = QuizManager.update_quiz(quiz, get_json_body(request))
    return jsonify({"message": "Quiz updated successfully", "quiz": quiz.to_dict()}), 200


# DELETE a quiz
@quiz_bp.route("/<int:class_id>/quizzes/<int:quiz_id>", methods=["DELETE"])
@login_required
@role_required(TEACHER)
def delete_quiz(class_id, quiz_id, principal):
    ClassManager.get_owned_class(class_id, principal)
    QuizManager.delete_quiz(QuizManager.get_for_class(class_id, quiz_id))
    return jsonify({"message": "Quiz deleted successfully"}), 200


# Fetch all quizzes of a class
@quiz_bp.route("/<int:class_id>/quizzes", methods=["GET"])
@login_required
def get_quizzes(class_id, principal):
    existing_class = ClassManager.get_visible_class(class_id, principal)
    return jsonify({"quizzes": [quiz.to_summary() for quiz in existing_class.quizzes]}), 200


# Fetch one quiz; students only see it while it is open and unattempted
@quiz_bp.route("/<int:class_id>/quizzes/<int:quiz_id>", methods=["GET"])
@login_required
def get_quiz(class_id, quiz_id, principal):
    existing_class = ClassManager.get_visible_class(class_id, principal)
    quiz = QuizManager.get_for_class(class_id, quiz_id)

    if existing_class.is_owned_by(principal.id):
        return jsonify({"quiz": quiz.to_dict()}), 200

    SubmissionGatekeeper.check(principal.id, quiz.id, utcnow(), quiz=quiz)
    return jsonify({"quiz": quiz.to_dict(include_answers=False)}), 200


#                                                         SUBMISSIONS
#_____________________________________________________________________________________________________________
@quiz_bp.route("/<int:class_id>/quizzes/<int:quiz_id>/responses", methods=["POST"])
@login_required
@role_required(STUDENT)
def submit_responses(class_id, quiz_id, principal):
    existing_class = ClassManager.get_class(class_id)
    if not existing_class.has_student(principal.id):
        raise Forbidden("User is not a student of this class")
    QuizManager.get_for_class(class_id, quiz_id)

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise MalformedResponse("Request body must be an object with a 'responses' list")
    result = ScoringEngine.submit(principal.id, quiz_id, data.get("responses"))

    return jsonify({
        "message": "Student responses stored successfully",
        "score": result.score,
        "out_of": result.out_of,
    }), 200


#                                                         RESULTS
#_____________________________________________________________________________________________________________
@quiz_bp.route("/<int:class_id>/quizzes/<int:quiz_id>/results/<int:student_id>", methods=["GET"])
@login_required
def get_student_result(class_id, quiz_id, student_id, principal):
    existing_class = ClassManager.get_class(class_id)
    if not (existing_class.is_owned_by(principal.id) or
            (principal.role == STUDENT and principal.id == student_id)):
        raise Forbidden("User is not authorized to view this result")
    QuizManager.get_for_class(class_id, quiz_id)

    result = ResultAggregator.result_for(student_id, quiz_id)
    return jsonify({"score": result.score, "out_of": result.out_of}), 200


@quiz_bp.route("/<int:class_id>/quizzes/<int:quiz_id>/results", methods=["GET"])
@login_required
@role_required(TEACHER)
def get_quiz_results(class_id, quiz_id, principal):
    ClassManager.get_owned_class(class_id, principal)
    quiz = QuizManager.get_for_class(class_id, quiz_id)
    return jsonify({"results": ResultAggregator.report_rows(quiz)}), 200


@quiz_bp.route("/<int:class_id>/quizzes/<int:quiz_id>/csvresults", methods=["GET"])
@login_required
@role_required(TEACHER)
def export_quiz_results(class_id, quiz_id, principal):
    existing_class = ClassManager.get_owned_class(class_id, principal)
    quiz = QuizManager.get_for_class(class_id, quiz_id)

    response = make_response(ResultAggregator.to_csv(quiz, existing_class.class_name))
    response.headers["Content-Type"] = "text/csv"
    response.headers["Content-Disposition"] = f"attachment; filename=quiz_results_{quiz_id}.csv"
    return response
