"""
API tests for quiz authoring, viewing, submission and results.
"""
import unittest
from datetime import timedelta
from models import db
from models.quizzes import Quiz
from models.student_responses import StudentResponse
from models.student_results import StudentResult
from utils.helpers import utcnow
from tests.test_fixtures import ApiTestCase


def _future(minutes=60):
    return (utcnow() + timedelta(minutes=minutes)).isoformat()


QUIZ_BODY = {
    "quiz_name": "Week 1",
    "duration": 30,
    "questions": [
        {
            "question_text": "2 + 2?",
            "options": [
                {"option_text": "4", "is_correct": True},
                {"option_text": "5", "is_correct": False},
            ],
        },
        {
            "question_text": "Pick the primes",
            "is_multiple_choice": True,
            "options": [
                {"option_text": "2", "is_correct": True},
                {"option_text": "4", "is_correct": False},
                {"option_text": "5", "is_correct": True},
            ],
        },
    ],
}


class TestQuizAuthoring(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.teacher = self.make_teacher()
        self.alice = self.make_user("alice")
        self.klass = self.make_class(self.teacher, students=[self.alice])
        self.url = f"/api/classes/{self.klass.id}/quizzes"

    def test_create_quiz(self):
        response = self.client.post(self.url, headers=self.auth(self.teacher),
                                    json={**QUIZ_BODY, "start_date": _future()})
        self.assertEqual(response.status_code, 201)
        quiz = response.get_json()["quiz"]
        self.assertEqual(quiz["class_id"], self.klass.id)
        self.assertEqual([len(q["options"]) for q in quiz["questions"]], [2, 3])
        self.assertTrue(quiz["questions"][1]["is_multiple_choice"])

    def test_start_date_must_be_in_the_future(self):
        past = (utcnow() - timedelta(minutes=1)).isoformat()
        response = self.client.post(self.url, headers=self.auth(self.teacher),
                                    json={**QUIZ_BODY, "start_date": past})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Quiz start date must be in the future")
        self.assertEqual(Quiz.query.count(), 0)

    def test_timezone_aware_start_date_is_stored_as_utc(self):
        aware = (utcnow() + timedelta(hours=3)).replace(microsecond=0).isoformat() + "+02:00"
        response = self.client.post(self.url, headers=self.auth(self.teacher),
                                    json={**QUIZ_BODY, "start_date": aware})
        self.assertEqual(response.status_code, 201)
        stored = Quiz.query.one()
        expected = (utcnow() + timedelta(hours=1)).replace(microsecond=0)
        self.assertLess(abs((stored.start_date - expected).total_seconds()), 5)

    def test_bad_duration(self):
        response = self.client.post(self.url, headers=self.auth(self.teacher),
                                    json={**QUIZ_BODY, "start_date": _future(), "duration": 0})
        self.assertEqual(response.status_code, 400)

    def test_question_without_options(self):
        body = {**QUIZ_BODY, "start_date": _future(),
                "questions": [{"question_text": "Empty?", "options": []}]}
        response = self.client.post(self.url, headers=self.auth(self.teacher), json=body)
        self.assertEqual(response.status_code, 400)

    def test_only_owner_creates_quizzes(self):
        other = self.make_teacher("other")
        response = self.client.post(self.url, headers=self.auth(other),
                                    json={**QUIZ_BODY, "start_date": _future()})
        self.assertEqual(response.status_code, 403)

    def test_update_replaces_questions(self):
        quiz = self.make_two_question_quiz(self.klass, start_offset=timedelta(hours=2))
        response = self.client.patch(f"{self.url}/{quiz.id}", headers=self.auth(self.teacher), json={
            "quiz_name": "Renamed",
            "questions": [{"question_text": "Only one", "options": [{"option_text": "x", "is_correct": True}]}],
        })
        self.assertEqual(response.status_code, 200)
        body = response.get_json()["quiz"]
        self.assertEqual(body["quiz_name"], "Renamed")
        self.assertEqual(len(body["questions"]), 1)

    def test_update_rejects_past_start_date(self):
        quiz = self.make_two_question_quiz(self.klass, start_offset=timedelta(hours=2))
        response = self.client.patch(f"{self.url}/{quiz.id}", headers=self.auth(self.teacher),
                                     json={"start_date": (utcnow() - timedelta(hours=1)).isoformat()})
        self.assertEqual(response.status_code, 400)

    def test_list_quizzes(self):
        quiz = self.make_two_question_quiz(self.klass)
        response = self.client.get(self.url, headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([q["quiz_id"] for q in response.get_json()["quizzes"]], [quiz.id])

    def test_quiz_under_wrong_class_is_not_found(self):
        other_class = self.make_class(self.teacher, class_name="Other")
        quiz = self.make_two_question_quiz(other_class)
        response = self.client.get(f"{self.url}/{quiz.id}", headers=self.auth(self.teacher))
        self.assertEqual(response.status_code, 404)

    def test_delete_quiz_removes_attempts(self):
        quiz = self.make_two_question_quiz(self.klass)
        quiz_id = quiz.id
        self.client.post(f"{self.url}/{quiz_id}/responses", headers=self.auth(self.alice), json={"responses": []})
        response = self.client.delete(f"{self.url}/{quiz_id}", headers=self.auth(self.teacher))
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(db.session.get(Quiz, quiz_id))
        self.assertEqual(StudentResponse.query.count(), 0)
        self.assertEqual(StudentResult.query.count(), 0)


class TestQuizTaking(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.teacher = self.make_teacher()
        self.alice = self.make_user("alice", full_name="Alice Liddell")
        self.bob = self.make_user("bob")
        self.klass = self.make_class(self.teacher, students=[self.alice], class_name="Maths")
        self.quiz = self.make_two_question_quiz(self.klass)
        (self.o1, self.o2), (self.o3, self.o4) = self.option_ids(self.quiz)
        self.q1, self.q2 = [q.id for q in self.quiz.questions]
        self.url = f"/api/classes/{self.klass.id}/quizzes/{self.quiz.id}"

    def submit(self, user, responses):
        return self.client.post(f"{self.url}/responses", headers=self.auth(user), json={"responses": responses})

    def test_teacher_sees_correct_flags(self):
        response = self.client.get(self.url, headers=self.auth(self.teacher))
        options = response.get_json()["quiz"]["questions"][0]["options"]
        self.assertIn("is_correct", options[0])

    def test_student_view_hides_correct_flags(self):
        response = self.client.get(self.url, headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 200)
        for question in response.get_json()["quiz"]["questions"]:
            for option in question["options"]:
                self.assertNotIn("is_correct", option)

    def test_student_view_gated_before_start(self):
        quiz = self.make_two_question_quiz(self.klass, start_offset=timedelta(hours=1))
        response = self.client.get(f"/api/classes/{self.klass.id}/quizzes/{quiz.id}", headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["kind"], "QuizNotStarted")

    def test_student_view_gated_after_attempt(self):
        self.submit(self.alice, [])
        response = self.client.get(self.url, headers=self.auth(self.alice))
        self.assertEqual(response.get_json()["kind"], "AlreadySubmitted")

    def test_non_member_cannot_view(self):
        response = self.client.get(self.url, headers=self.auth(self.bob))
        self.assertEqual(response.status_code, 403)

    def test_full_marks(self):
        response = self.submit(self.alice, [
            {"question_id": self.q1, "selected_options": [self.o1]},
            {"question_id": self.q2, "selected_options": [self.o3]},
        ])
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual((body["score"], body["out_of"]), (2, 2))

    def test_partial_submission(self):
        response = self.submit(self.alice, [{"question_id": self.q1, "selected_options": [self.o2]}])
        body = response.get_json()
        self.assertEqual((body["score"], body["out_of"]), (0, 2))

    def test_string_ids_are_accepted(self):
        response = self.submit(self.alice, [
            {"question_id": str(self.q1), "selected_options": [str(self.o1)]},
        ])
        self.assertEqual(response.get_json()["score"], 1)

    def test_second_submission_conflicts(self):
        self.submit(self.alice, [])
        response = self.submit(self.alice, [])
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()["kind"], "AlreadySubmitted")

    def test_body_student_id_is_ignored(self):
        self.klass.students.append(self.bob)
        db.session.commit()
        response = self.client.post(f"{self.url}/responses", headers=self.auth(self.alice),
                                    json={"student_id": self.bob.id, "responses": []})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(StudentResult.query.one().student_id, self.alice.id)

    def test_submission_after_end(self):
        quiz = self.make_two_question_quiz(self.klass, start_offset=timedelta(hours=-3), duration=60)
        response = self.client.post(f"/api/classes/{self.klass.id}/quizzes/{quiz.id}/responses",
                                    headers=self.auth(self.alice), json={"responses": []})
        self.assertEqual(response.get_json()["kind"], "QuizEnded")

    def test_malformed_submission_writes_nothing(self):
        response = self.submit(self.alice, [{"question_id": self.q1, "selected_options": "o1"}])
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["kind"], "MalformedResponse")
        self.assertEqual(StudentResponse.query.count(), 0)
        self.assertEqual(StudentResult.query.count(), 0)

    def test_array_body_is_a_malformed_response(self):
        response = self.client.post(f"{self.url}/responses", headers=self.auth(self.alice),
                                    json=[{"question_id": self.q1, "selected_options": [self.o1]}])
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["kind"], "MalformedResponse")
        self.assertEqual(StudentResponse.query.count(), 0)

    def test_repeated_question_is_rejected(self):
        response = self.submit(self.alice, [{"question_id": self.q1, "selected_options": [self.o1]}] * 5)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["kind"], "MalformedResponse")
        self.assertEqual(StudentResult.query.count(), 0)

    def test_teacher_cannot_submit(self):
        response = self.submit(self.teacher, [])
        self.assertEqual(response.status_code, 403)

    def test_non_member_cannot_submit(self):
        response = self.submit(self.bob, [])
        self.assertEqual(response.status_code, 403)

    def test_student_reads_own_result(self):
        self.submit(self.alice, [{"question_id": self.q1, "selected_options": [self.o1]}])
        response = self.client.get(f"{self.url}/results/{self.alice.id}", headers=self.auth(self.alice))
        self.assertEqual(response.get_json(), {"score": 1, "out_of": 2})

    def test_student_cannot_read_someone_elses_result(self):
        response = self.client.get(f"{self.url}/results/{self.bob.id}", headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 403)

    def test_result_not_found(self):
        response = self.client.get(f"{self.url}/results/{self.alice.id}", headers=self.auth(self.teacher))
        self.assertEqual(response.status_code, 404)

    def test_teacher_lists_results(self):
        self.submit(self.alice, [{"question_id": self.q1, "selected_options": [self.o1]}])
        response = self.client.get(f"{self.url}/results", headers=self.auth(self.teacher))
        results = response.get_json()["results"]
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]["full_name"], "Alice Liddell")
        self.assertEqual((results[0]["score"], results[0]["out_of"]), (1, 2))

    def test_student_cannot_list_results(self):
        response = self.client.get(f"{self.url}/results", headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 403)

    def test_csv_export(self):
        self.submit(self.alice, [])
        response = self.client.get(f"{self.url}/csvresults", headers=self.auth(self.teacher))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.headers["Content-Type"].startswith("text/csv"))
        self.assertIn(f"quiz_results_{self.quiz.id}.csv", response.headers["Content-Disposition"])
        lines = response.get_data(as_text=True).strip().splitlines()
        self.assertEqual(lines[0], "full_name,submitted_at,score,out_of,quiz_name,class_name")
        self.assertTrue(lines[1].startswith("Alice Liddell,"))
        self.assertTrue(lines[1].endswith(",0,2,Quiz 1,Maths"))


if __name__ == '__main__':
    unittest.main()
