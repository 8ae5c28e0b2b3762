from flask import Blueprint, current_app, jsonify, request

from ..extensions import get_collection
from ..storage.collection import validate_store_name
from ..storage.errors import DuplicateKeyError, DuplicateNameError, InvalidNameError, KeyNotFoundError

bp = Blueprint("stores_api", __name__)


def _summary(dictionary):
    mtime = dictionary.modified_at()
    return {
        "name": dictionary.name,
        "records": len(dictionary),
        "modified_at": mtime.isoformat() if mtime else None,
    }


def _not_found(what: str):
    return jsonify({"error": f"{what} not found"}), 404


@bp.get("/stores")
def list_stores():
    stores = sorted(get_collection().get_all_dictionaries().values(), key=lambda d: d.name)
    return jsonify([_summary(d) for d in stores])


@bp.post("/stores")
def create_store():
    payload = request.get_json(silent=True) or {}
    collection = get_collection()
    try:
        name = validate_store_name(payload.get("name"), collection.path)
        dictionary = collection.create_dictionary(name)
    except InvalidNameError as e:
        return jsonify({"error": str(e)}), 400
    except DuplicateNameError as e:
        return jsonify({"error": str(e)}), 409
    return jsonify(_summary(dictionary)), 201


@bp.get("/stores/<name>")
def get_store(name):
    dictionary = get_collection().get_dictionary(name)
    if dictionary is None:
        return _not_found("Dictionary")
    return jsonify({"name": dictionary.name, "records": dictionary.get_all()})


@bp.delete("/stores/<name>")
def delete_store(name):
    if not get_collection().delete_dictionary(name):
        return _not_found("Dictionary")
    current_app.logger.info("Deleted dictionary %s via API", name)
    return jsonify({"ok": True})


@bp.get("/stores/<name>/records/<key>")
def get_record(name, key):
    dictionary = get_collection().get_dictionary(name)
    if dictionary is None:
        return _not_found("Dictionary")
    if key not in dictionary:
        return _not_found("Record")
    return jsonify(dictionary.get(key))


@bp.post("/stores/<name>/records")
def add_record(name):
    dictionary = get_collection().get_dictionary(name)
    if dictionary is None:
        return _not_found("Dictionary")
    payload = request.get_json(silent=True) or {}
    for r in ("key", "value"):
        if r not in payload:
            return jsonify({"error": f"Missing field: {r}"}), 400
    try:
        dictionary.add(payload["key"], payload["value"])
    except DuplicateKeyError as e:
        return jsonify({"error": str(e)}), 409
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"key": payload["key"], "value": payload["value"]}), 201


@bp.put("/stores/<name>/records/<key>")
def update_record(name, key):
    dictionary = get_collection().get_dictionary(name)
    if dictionary is None:
        return _not_found("Dictionary")
    payload = request.get_json(silent=True) or {}
    if "value" not in payload:
        return jsonify({"error": "Missing field: value"}), 400
    try:
        dictionary.update(key, payload["value"])
    except KeyNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify({"key": key, "value": payload["value"]})


@bp.delete("/stores/<name>/records/<key>")
def delete_record(name, key):
    dictionary = get_collection().get_dictionary(name)
    if dictionary is None:
        return _not_found("Dictionary")
    return jsonify({"deleted": dictionary.delete(key)})


@bp.errorhandler(OSError)
def handle_storage_failure(e):
    current_app.logger.exception("Record store I/O failed")
    return jsonify({"error": "Storage failure"}), 500
