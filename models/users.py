from models import db
from werkzeug.security import generate_password_hash, check_password_hash

TEACHER = "teacher"
STUDENT = "student"
ROLES = (TEACHER, STUDENT)


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), nullable=False, unique=True)
    email = db.Column(db.String(100), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(20), nullable=False)  # 'teacher' or 'student'
    date_created = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    owned_classes = db.relationship("Class", back_populates="teacher", cascade="all, delete")

    def set_password(self, password):
        """Hashes the password before storing."""
        self.password_hash = generate_password_hash(password, method="pbkdf2:sha256")

    def check_password(self, password):
        """Checks if a given password matches the stored hash."""
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.full_name,
            "email": self.email,
            "role": self.role,
            "username": self.username,
        }

    def to_public_dict(self):
        """Roster/teacher card shape, without role or credentials."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "username": self.username,
        }
