import csv
import io
from models.student_results import StudentResult
from utils.errors import NotFound

CSV_FIELDS = ["full_name", "submitted_at", "score", "out_of", "quiz_name", "class_name"]


class ResultAggregator:
    """Read side for stored quiz results. Callers handle authorization."""

    @staticmethod
    def results_for_quiz(quiz_id):
        return (
            StudentResult.query
            .filter_by(quiz_id=quiz_id)
            .order_by(StudentResult.submitted_at, StudentResult.id)
            .all()
        )

    @staticmethod
    def result_for(student_id, quiz_id):
        result = StudentResult.query.filter_by(student_id=student_id, quiz_id=quiz_id).first()
        if not result:
            raise NotFound("Student result not found")
        return result

    @staticmethod
    def report_rows(quiz):
        rows = []
        for result in ResultAggregator.results_for_quiz(quiz.id):
            rows.append({
                "student_id": result.student_id,
                "full_name": result.student.full_name if result.student else None,
                "quiz_id": quiz.id,
                "quiz_name": quiz.quiz_name,
                "score": result.score,
                "out_of": result.out_of,
                "submitted_at": result.submitted_at.isoformat(),
            })
        return rows

    @staticmethod
    def to_csv(quiz, class_name):
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in ResultAggregator.report_rows(quiz):
            writer.writerow({**row, "class_name": class_name})
        return buffer.getvalue()
