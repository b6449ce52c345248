from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Import models
from models.users import User

from models.classes import Class, class_students
from models.quizzes import Quiz
from models.quiz_questions import Question
from models.question_options import Option

from models.student_responses import StudentResponse
from models.student_results import StudentResult
