"""
Contact form API: validate the submission, then email the lead to the team and
an auto-reply to the submitter.
"""

from flask import Blueprint, current_app, jsonify, request

contact_bp = Blueprint("contact", __name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _payload():
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form


@contact_bp.route(
    "/api/contact", methods=ALL_METHODS, provide_automatic_options=False
)
def submit_contact():
    """POST only; everything else is 405 with a JSON body."""
    if request.method != "POST":
        return jsonify({"error": "Method not allowed"}), 405

    handler = current_app.extensions["contact_handler"]
    status, body = handler.handle(_payload())
    return jsonify(body), status


@contact_bp.after_request
def _allow_origin(resp):
    origin = current_app.extensions["contact_handler"].settings.allowed_origin
    if origin:
        resp.headers["Access-Control-Allow-Origin"] = origin
        resp.headers["Vary"] = "Origin"
    return resp
