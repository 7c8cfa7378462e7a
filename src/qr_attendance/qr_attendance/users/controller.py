from __future__ import annotations

from flask import Flask, render_template, request

from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError
from ..session.guards import current_identity, current_loader, current_navigator, role_router
from ..session.notify import FlashNotifier
from .service import initial_student_password


def register(app: Flask, container: Container) -> None:
    notifier = FlashNotifier()

    @app.route("/", endpoint="index")
    def index():
        return render_template("index.html", current_user=current_identity())

    @app.route("/auth", methods=["GET", "POST"], endpoint="auth")
    def auth():
        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")

            try:
                identity = container.auth_service.authenticate(username, password)
            except AuthenticationError as e:
                notifier.notify("Login Failed", str(e), category="danger")
            except Exception:
                app.logger.exception("Login error for %s", username)
                notifier.notify(
                    "Login Error",
                    "An error occurred during login. Please check your connection.",
                    category="danger",
                )
            else:
                notifier.notify("Login Successful", f"Welcome back, {identity.display_name}!", category="success")
                role_router().dispatch(identity)
                return current_navigator().response()

        return render_template("auth.html")

    @app.route("/auth/register", methods=["POST"], endpoint="register_student")
    def register_student():
        form = request.form
        try:
            identity = container.auth_service.register_student(
                school_id=form.get("school_id", ""),
                last_name=form.get("last_name", ""),
                first_name=form.get("first_name", ""),
                middle_name=form.get("middle_name"),
                birthdate=form.get("birthdate", ""),
                year_level=form.get("year_level", ""),
                tribe=form.get("tribe", ""),
            )
        except (ValidationError, AuthenticationError) as e:
            notifier.notify("Registration Failed", str(e), category="danger")
        except Exception:
            app.logger.exception("Registration error")
            notifier.notify(
                "Registration Error",
                "An error occurred during registration. Please try again.",
                category="danger",
            )
        else:
            password = initial_student_password(form.get("last_name", "").strip(), form.get("birthdate", "").strip())
            notifier.notify(
                "Registration Successful",
                f"Welcome {identity.get('first_name')}! Your password is: {password}",
                category="success",
            )
            role_router().dispatch(identity)
            return current_navigator().response()

        return render_template("auth.html", register_mode=True), 400

    @app.route("/logout", endpoint="logout")
    def logout():
        current_loader().logout()
        return current_navigator().response()
