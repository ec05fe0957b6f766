# app.py
import logging
import os
from typing import Any, Dict, List, Optional

from flask import Flask, current_app, jsonify, request

from bilgibite_notify import NotificationService, Recipient, build_service, load_settings

DEBUG = os.getenv("FLASK_ENV") != "production"


def _parse_recipients(raw: Any) -> List[Recipient]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("recipients must be a non-empty list")
    recipients: List[Recipient] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError("each recipient must be an object")
        address = item.get("email") or item.get("address") or ""
        if not isinstance(address, str):
            raise ValueError("recipient email must be a string")
        address = address.strip()
        if not address:
            raise ValueError("each recipient needs an email")
        variables = item.get("variables") or {}
        if not isinstance(variables, dict):
            raise ValueError("recipient variables must be an object")
        recipients.append(Recipient(address=address, display_name=item.get("name"), variables=variables))
    return recipients


def notifications() -> NotificationService:
    return current_app.extensions["notifications"]


def create_app(service: Optional[NotificationService] = None, start_worker: Optional[bool] = None) -> Flask:
    app = Flask(__name__)

    if service is None:
        service = build_service(load_settings())
    app.extensions["notifications"] = service

    if start_worker is None:
        start_worker = service.settings.autostart_worker
    if start_worker:
        service.start()

    @app.route("/api/notifications", methods=["POST"])
    def send_notification():
        payload: Dict[str, Any] = request.get_json(silent=True) or {}
        template = payload.get("template")
        if not template:
            return jsonify({"success": False, "error": "Missing template"}), 400
        variables = payload.get("variables") or {}
        if not isinstance(variables, dict):
            return jsonify({"success": False, "error": "variables must be an object"}), 400
        try:
            recipients = _parse_recipients(payload.get("recipients"))
        except ValueError as exc:
            return jsonify({"success": False, "error": str(exc)}), 400

        result = notifications().send_notification(
            template,
            recipients,
            variables,
            priority=payload.get("priority") or "normal",
        )
        return jsonify(result.to_dict()), (202 if result.success else 400)

    @app.route("/api/notifications/stats")
    def notification_stats():
        return jsonify(notifications().get_queue_stats())

    @app.route("/api/notifications/templates")
    def notification_templates():
        return jsonify({"templates": notifications().store.names()})

    return app


app = create_app()


# ------------- Run -------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if DEBUG else logging.INFO)
    notifications_service = app.extensions["notifications"]
    notifications_service.start()
    try:
        app.run(debug=DEBUG, use_reloader=False)
    finally:
        notifications_service.stop()
