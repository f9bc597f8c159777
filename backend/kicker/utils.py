from datetime import datetime

from flask import jsonify


def ok(payload: dict | None = None, status: int = 200):
    data = payload or {}
    return jsonify({"ok": True, **data}), status


def err(message: str, status: int = 400, **extra):
    return jsonify({"ok": False, "error": message, **extra}), status


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
