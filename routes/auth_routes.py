from flask import Blueprint, request, render_template, redirect, url_for, session, jsonify, flash
from flask_login import login_user, logout_user

from services.auth_service import authenticate_user
from utils.responses import request_data, wants_json

# Define the blueprint
auth_bp = Blueprint("auth", __name__)


# =========================================================
# LOGIN ROUTE
# =========================================================
@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        return render_template("login.html", title="Login")

    data = request_data()
    email = data.get("email")
    password = data.get("password")

    # 1. Basic Validation
    if not email or not password:
        if wants_json():
            return jsonify({"message": "Email and password are required"}), 400
        return render_template("login.html", title="Login", error="Email and password are required"), 400

    # 2. Authenticate User
    user = authenticate_user(email, password)

    if not user:
        if wants_json():
            return jsonify({"message": "Invalid credentials"}), 401
        return render_template("login.html", title="Login", error="Invalid email or password"), 401

    # 3. Log the user in with Flask-Login
    login_user(user)
    session["role"] = user.role

    if wants_json():
        return jsonify({"message": "Logged in", "user": user.to_dict()})

    flash("Logged in successfully", "success")

    # 4. Role-Based Redirect
    if user.role == "admin":
        return redirect(url_for("departments.list_departments"))
    if user.role == "student":
        return redirect(url_for("portal.my_courses"))
    return redirect(url_for("catalog.index"))


# =========================================================
# LOGOUT ROUTE
# =========================================================
@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    logout_user()      # Tell Flask-Login to wipe the user session
    session.clear()
    if wants_json():
        return jsonify({"message": "Logged out"})
    return redirect(url_for("auth.login"))
