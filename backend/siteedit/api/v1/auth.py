from flask import jsonify
from flask_jwt_extended import create_access_token
from siteedit.errors import Forbidden, Unauthorized
from siteedit.models.user import User
from .schemas import LoginRequest, parse_body
from . import v1_bp


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    body = parse_body(LoginRequest)

    user = User.query.filter_by(email=body.email.strip().lower()).first()

    if not user or not user.check_password(body.password):
        raise Unauthorized("Invalid credentials")

    if not user.is_active:
        raise Forbidden("User account disabled")

    access_token = create_access_token(identity=user.id)

    return jsonify({
        "access_token": access_token,
        "user": {"id": user.id, "email": user.email},
    }), 200
