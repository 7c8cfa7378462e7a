from __future__ import annotations

from flask import Flask, jsonify, render_template, request, send_file

from ..common.datetime_utils import format_clock, parse_iso_date
from ..container import Container
from ..core.constants import DEFAULT_RECORDS_LIMIT
from ..core.enums import STAFF_ROLES, Role, StatsPeriod
from ..core.exceptions import ValidationError
from ..session.guards import current_identity, role_required
from .model import AttendanceRecord, AttendanceStats, RecordFilters
from .qr import decode_qr_image, make_qr_png


def record_to_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.id,
        "student_id": r.student_id,
        "school_id": r.school_id,
        "student_name": r.student_name,
        "year_level": r.year_level,
        "date": r.date.isoformat(),
        "time_in": format_clock(r.time_in) or None,
        "time_out": format_clock(r.time_out) or None,
        "recorded_by": r.recorded_by,
        "status": r.status.value,
    }


def stats_to_json(s: AttendanceStats) -> dict:
    return {
        "period": s.period.value,
        "start": s.start.isoformat(),
        "end": s.end.isoformat(),
        "total": s.total,
        "present": s.present,
        "rate": s.rate,
    }


def register(app: Flask, container: Container) -> None:
    def _filters_from_args(*, default_limit=None) -> RecordFilters:
        args = request.args
        day = args.get("date")
        limit = args.get("limit")
        try:
            return RecordFilters(
                date=parse_iso_date(day) if day else None,
                school_id=args.get("school_id") or None,
                student_name=args.get("student_name") or None,
                year_level=args.get("year_level") or None,
                limit=int(limit) if limit else default_limit,
            )
        except ValueError:
            raise ValidationError("Invalid filter: date must be YYYY-MM-DD and limit a number")

    def _render_home(template_role: Role, **context):
        return render_template(
            "home.html",
            current_user=current_identity(),
            home_role=template_role.value,
            **context,
        )

    def _scan(school_id: str):
        identity = current_identity()
        try:
            record = container.attendance_service.record(school_id, identity.get("id"))
            return jsonify({
                "success": True,
                "message": "Attendance recorded successfully",
                "data": record_to_json(record),
            }), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            app.logger.exception("Failed to record attendance for %s", school_id)
            return jsonify({"success": False, "message": "Failed to record attendance"}), 500

    @app.route("/admin/dashboard", endpoint="admin_home")
    @role_required(Role.ADMIN)
    def admin_home():
        records = container.attendance_service.list_records(RecordFilters(limit=50))
        stats = container.attendance_service.dashboard_stats()
        return _render_home(Role.ADMIN, records=records, stats=stats)

    @app.route("/faculty/dashboard", endpoint="faculty_home")
    @role_required(Role.FACULTY)
    def faculty_home():
        records = container.attendance_service.list_records(RecordFilters(limit=50))
        stats = container.attendance_service.dashboard_stats()
        return _render_home(Role.FACULTY, records=records, stats=stats)

    @app.route("/sbo/home", endpoint="sbo_home")
    @role_required(Role.SBO)
    def sbo_home():
        records = container.attendance_service.list_records(RecordFilters(limit=20))
        return _render_home(Role.SBO, records=records)

    @app.route("/student/dashboard", endpoint="student_home")
    @role_required(Role.STUDENT)
    def student_home():
        check = None
        try:
            check = container.attendance_service.check_student(current_identity().get("school_id", ""))
        except ValidationError as e:
            app.logger.warning("Student dashboard without attendance data: %s", e)
        return _render_home(Role.STUDENT, check=check)

    @app.route("/student/qr.png", endpoint="student_qr_image")
    @role_required(Role.STUDENT)
    def student_qr_image():
        """Personal QR code; it encodes the student's school ID."""
        school_id = str(current_identity().get("school_id") or "")
        if not school_id:
            return jsonify({"success": False, "message": "No school ID on this account"}), 400
        return send_file(make_qr_png(school_id), mimetype="image/png")

    @app.route("/sbo/check/<school_id>", endpoint="sbo_check")
    @role_required(Role.SBO)
    def sbo_check(school_id: str):
        try:
            check = container.attendance_service.check_student(school_id)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        window = container.attendance_service.current_window()
        return jsonify({
            "success": True,
            "has_record": check.has_record,
            "status": check.status,
            "scan_window": window.value if window else None,
            "student": {
                "id": check.student.id,
                "school_id": check.student.school_id,
                "name": check.student.full_name,
                "year_level": check.student.year_level,
            },
            "record": record_to_json(check.record) if check.record else None,
            "recent_records": [record_to_json(r) for r in check.recent_records],
        })

    @app.route("/sbo/scan", methods=["POST"], endpoint="sbo_scan")
    @role_required(Role.SBO)
    def sbo_scan():
        """Record a scan from the decoded QR text (JSON ``qr_code`` or form ``school_id``)."""
        data = request.get_json(silent=True) or {}
        school_id = (data.get("qr_code") or request.form.get("school_id") or "").strip()
        if not school_id:
            return jsonify({"success": False, "message": "QR code is empty"}), 400
        return _scan(school_id)

    @app.route("/sbo/scan/image", methods=["POST"], endpoint="sbo_scan_image")
    @role_required(Role.SBO)
    def sbo_scan_image():
        if "image" not in request.files:
            return jsonify({"success": False, "message": "Missing image file"}), 400
        try:
            school_id = decode_qr_image(request.files["image"].stream)
        except Exception:
            app.logger.exception("Could not read uploaded QR image")
            return jsonify({"success": False, "message": "Could not read the uploaded image"}), 400
        if not school_id:
            return jsonify({"success": False, "message": "No QR code detected in the image"}), 400
        return _scan(school_id)

    @app.route("/records", endpoint="records")
    @role_required(*STAFF_ROLES)
    def records():
        try:
            filters = _filters_from_args(default_limit=DEFAULT_RECORDS_LIMIT)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        rows = container.attendance_service.list_records(filters)
        return jsonify({"success": True, "data": [record_to_json(r) for r in rows]})

    @app.route("/records.csv", endpoint="records_csv")
    @role_required(*STAFF_ROLES)
    def records_csv():
        try:
            filters = _filters_from_args()
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        csv_bytes = container.attendance_service.export_csv(filters).encode("utf-8-sig")
        suffix = filters.date.strftime("%Y%m%d") if filters.date else "all"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=attendance_{suffix}.csv"},
        )

    @app.route("/records/stats", endpoint="records_stats")
    @role_required(*STAFF_ROLES)
    def records_stats():
        """Attendance rate for ``?period=today|week|month`` (default today)."""
        try:
            period = StatsPeriod(request.args.get("period", StatsPeriod.TODAY.value))
        except ValueError:
            return jsonify({"success": False, "message": "period must be one of: today, week, month"}), 400
        stats = container.attendance_service.stats(period)
        return jsonify({"success": True, "data": stats_to_json(stats)})
