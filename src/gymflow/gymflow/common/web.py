"""Helpers shared by the Flask controllers (auth guards, JSON errors, uploads)."""

from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from functools import wraps
from pathlib import Path
from typing import Any, Optional

from flask import jsonify, session
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DataAccessError,
    FileOperationError,
    ValidationError,
)
from .datetime_utils import format_timestamp

logger = logging.getLogger(__name__)


def current_role() -> Optional[Role]:
    role = session.get("role")
    return Role(role) if role else None


def current_user_id() -> int:
    return int(session["user_id"])


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def roles_required(*roles: Role):
    """Require a logged-in user; with roles given, require one of them."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response("Please log in to continue", 401)
            if roles and current_role() not in roles:
                return error_response("You do not have permission", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_errors(view):
    """Translate domain exceptions into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except (ValidationError, FileOperationError) as e:
            return error_response(str(e), 400)
        except AuthenticationError as e:
            return error_response(str(e), 401)
        except AuthorizationError as e:
            return error_response(str(e), 403)
        except DataAccessError:
            logger.exception("Database error in %s", view.__name__)
            return error_response("Database error", 500)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return error_response("Internal server error", 500)

    return wrapper


def to_json(obj: Any) -> Any:
    if is_dataclass(obj):
        return {k: to_json(v) for k, v in asdict(obj).items()}
    if isinstance(obj, (list, tuple)):
        return [to_json(v) for v in obj]
    if isinstance(obj, datetime):
        return format_timestamp(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    return obj


def parse_text_arg(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def parse_int_arg(value: Any, field_name: str, *, required: bool = True) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def parse_datetime_arg(value: Any, field_name: str, *, required: bool = True) -> Optional[datetime]:
    """Accept 'YYYY-MM-DD HH:MM:SS' or ISO 8601 ('YYYY-MM-DDTHH:MM[:SS]')."""
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a date-time string")
    try:
        return datetime.fromisoformat(value.strip()).replace(tzinfo=None)
    except ValueError:
        raise ValidationError(f"{field_name} must look like YYYY-MM-DD HH:MM:SS")


def save_upload(upload: Optional[FileStorage], target_dir: str | Path) -> Path:
    """Store an uploaded file under its sanitized original name."""
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded")

    filename = secure_filename(upload.filename)
    if not filename:
        raise ValidationError("Invalid file name")

    path = Path(target_dir) / filename
    upload.save(str(path))
    return path
