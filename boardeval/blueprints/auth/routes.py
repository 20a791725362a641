from flask import jsonify
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf
from . import bp
from .forms import LoginForm
from ...models.user import User

def _user_payload(user):
    return {
        "id": user.id,
        "email": user.email,
        "name": user.display_name,
        "is_admin": user.is_admin,
        "is_super_admin": user.is_super_admin,
    }

@bp.get("/csrf")
def csrf_token():
    return jsonify({"csrf_token": generate_csrf()})

@bp.post("/login")
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        return jsonify({"error": "InvalidForm", "fields": form.errors}), 400
    user = User.query.filter_by(email=form.email.data).first()
    if user and user.check_password(form.password.data):
        login_user(user)
        return jsonify(_user_payload(user))
    return jsonify({"error": "Unauthorized", "message": "Invalid credentials"}), 401

@bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"success": True})

@bp.get("/me")
@login_required
def me():
    return jsonify(_user_payload(current_user))
