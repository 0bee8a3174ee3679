from flask import Blueprint, jsonify, current_app

core = Blueprint("core", __name__)


@core.get("/")
def root():
    return jsonify({"service": "contact-api", "ok": True})


@core.get("/api")
def api_index():
    return jsonify({"endpoints": {"contact": ["/api/contact (POST)"]}})


@core.get("/__ping")
def ping():
    mailer = current_app.extensions["contact_handler"].mailer
    return jsonify({"ok": True, "email_provider": mailer.provider}), 200
