from flask import Blueprint, request, jsonify
from models import db
from models.users import TEACHER, STUDENT
from models.classes import Class
from classes.class_manager import ClassManager
from classes.validators import validate_length
from utils.helpers import clean_text, get_json_body, parse_id
from utils.utils import login_required, role_required

class_bp = Blueprint("classes", __name__)


#                                                         CLASSES
#_____________________________________________________________________________________________________________
# Fetch the caller's classes
@class_bp.route("/", methods=["GET"])
@login_required
def get_classes(principal):
    classes = [
        {
            "classObject": existing_class.to_dict(),
            "teacher": existing_class.teacher.to_public_dict(),
        }
        for existing_class in ClassManager.classes_for(principal)
    ]
    return jsonify({"classes": classes}), 200


# CREATE a class
@class_bp.route("/create", methods=["POST"])
@login_required
@role_required(TEACHER)
def create_class(principal):
    data = get_json_body(request)
    class_name = clean_text(data.get("class_name"), "class_name")
    validate_length("class_name", class_name, 255)

    new_class = Class(class_name=class_name, teacher_id=principal.id)
    db.session.add(new_class)
    db.session.commit()

    return jsonify({"message": "Class created successfully", "class": new_class.to_dict()}), 201


# EDIT a class
@class_bp.route("/<int:class_id>", methods=["PATCH"])
@login_required
@role_required(TEACHER)
def update_class(class_id, principal):
    existing_class = ClassManager.get_owned_class(class_id, principal)
    data = get_json_body(request)

    if "class_name" in data:
        existing_class.class_name = clean_text(data.get("class_name"), "class_name")
        validate_length("class_name", existing_class.class_name, 255)
    db.session.commit()

    return jsonify({"message": "Class details updated successfully", "class": existing_class.to_dict()}), 200


# DELETE a class
@class_bp.route("/<int:class_id>", methods=["DELETE"])
@login_required
@role_required(TEACHER)
def delete_class(class_id, principal):
    existing_class = ClassManager.get_owned_class(class_id, principal)
    db.session.delete(existing_class)
    db.session.commit()

    return jsonify({"message": "Class deleted successfully"}), 200


#                                                         ROSTER
#_____________________________________________________________________________________________________________
@class_bp.route("/<int:class_id>/add-student", methods=["POST"])
@login_required
@role_required(TEACHER)
def add_student(class_id, principal):
    existing_class = ClassManager.get_owned_class(class_id, principal)
    data = get_json_body(request)
    student = ClassManager.get_student(parse_id(data.get("studentId"), "studentId"))

    if not ClassManager.enroll_student(existing_class, student):
        return jsonify({"message": "Student already in the class"}), 200
    return jsonify({"message": "Student added to the class successfully"}), 200


@class_bp.route("/<int:class_id>/remove-student", methods=["DELETE"])
@login_required
@role_required(TEACHER)
def remove_student(class_id, principal):
    existing_class = ClassManager.get_owned_class(class_id, principal)
    data = get_json_body(request)
    ClassManager.unenroll_student(existing_class, parse_id(data.get("studentId"), "studentId"))

    return jsonify({"message": "Student removed from the class successfully"}), 200


@class_bp.route("/join", methods=["POST"])
@login_required
@role_required(STUDENT)
def join_class(principal):
    data = get_json_body(request)
    existing_class = ClassManager.get_class(parse_id(data.get("classId"), "classId"))
    student = ClassManager.get_student(principal.id)

    if not ClassManager.enroll_student(existing_class, student):
        return jsonify({"message": "Student already in the class"}), 200
    return jsonify({"message": "Student joined the class successfully"}), 200


@class_bp.route("/<int:class_id>/students", methods=["GET"])
@login_required
def get_students(class_id, principal):
    existing_class = ClassManager.get_visible_class(class_id, principal)
    students = [
        {
            "id": student.id,
            "name": student.full_name,
            "email": student.email,
            "username": student.username,
        }
        for student in sorted(existing_class.students, key=lambda s: s.id)
    ]
    return jsonify({"students": students}), 200
