"""Session guards, error translation and file exports shared by the feature controllers."""
from __future__ import annotations

import csv
import io
from functools import wraps
from typing import Iterable, Mapping, Optional, Sequence

import pandas as pd
from flask import Flask, jsonify, request, send_file, session
from openpyxl.utils import get_column_letter

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    LocationUnavailable,
    NotFoundError,
    ValidationError,
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return json_error("You do not have permission", 403)
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role", Role.STAFF.value))


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def write_csv(app: Flask, *, rows: Iterable[Mapping[str, object]], fieldnames: Sequence[str], filename: str):
    """CSV attachment response (UTF-8 with BOM so spreadsheet tools detect the encoding)."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(fieldnames))
    writer.writeheader()
    for row in rows:
        writer.writerow(row)

    csv_bytes = out.getvalue().encode("utf-8-sig")
    return app.response_class(
        csv_bytes,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def write_xlsx(
    *,
    rows: Iterable[Mapping[str, object]],
    fieldnames: Sequence[str],
    sheet_name: str,
    filename: str,
    column_widths: Optional[Sequence[int]] = None,
):
    """Excel attachment built in memory (nothing is written to disk)."""
    df = pd.DataFrame(list(rows), columns=list(fieldnames))

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
        if column_widths:
            ws = writer.sheets[sheet_name]
            for idx, width in enumerate(column_widths, start=1):
                ws.column_dimensions[get_column_letter(idx)].width = width

    output.seek(0)
    return send_file(output, download_name=filename, as_attachment=True, mimetype=XLSX_MIMETYPE)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(LocationUnavailable)
    def _location_unavailable(e: LocationUnavailable):
        return json_error(str(e), 422)

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return json_error(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return json_error(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return json_error(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return json_error(str(e), 404)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return json_error(str(e), 400)
