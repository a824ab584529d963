from flask import Blueprint, jsonify, request, url_for, redirect
from flask_login import login_user, logout_user, login_required, current_user

from extensions import oauth
from schemas import LoginPayload, RegisterPayload, parse
from security import current_settings, is_admin
from services import auth as auth_service

auth_bp = Blueprint("auth", __name__)


def _session_payload(user):
    data = user.to_principal()
    data["isAdmin"] = is_admin(user)
    return data


# Register
@auth_bp.route("/register", methods=["POST"])
def register():
    payload = parse(RegisterPayload, request.get_json(silent=True))
    user = auth_service.register(payload)
    return jsonify(user.to_principal()), 201


# Login
@auth_bp.route("/login", methods=["POST"])
def login():
    payload = parse(LoginPayload, request.get_json(silent=True))
    user = auth_service.authenticate(payload.email, payload.password)

    login_user(user)
    data = _session_payload(user)
    data["token"] = auth_service.issue_token(user, current_settings().secret_key)
    return jsonify(data)


# Logout
@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return "", 204


@auth_bp.route("/me")
@login_required
def me():
    return jsonify(_session_payload(current_user))


# Google OAuth
@auth_bp.route("/google")
def google_login():
    redirect_uri = url_for("auth.google_callback", _external=True)
    return oauth.google.authorize_redirect(redirect_uri)


@auth_bp.route("/google/callback")
def google_callback():
    token = oauth.google.authorize_access_token()
    userinfo = token.get("userinfo") or oauth.google.userinfo()
    user = auth_service.user_from_oauth(userinfo, provider="google")
    login_user(user)
    return redirect(url_for("home"))
