# MIT License © 2025 Motohiro Suzuki
"""
transport/http_app.py

HTTP surface (Flask):
  POST /generate-secret   {"key_id": "..."}  -> 200 text
  GET  /public-key                           -> 200 {"public-key-base64": ...}
  GET  /health                               -> 200 "OK"

Every SealingError is mapped through Failure -> HttpStatus. Only the
public message for the failure code is sent; detail stays in the log.
"""

from __future__ import annotations

import base64
import logging

from flask import Flask, Response, jsonify, request

from sealing.protocol.errors import SealingError
from sealing.protocol.failure import Failure, FailureCode, HttpStatus, public_message
from sealing.protocol.sealing import SealingCoordinator

log = logging.getLogger(__name__)

RACE_MESSAGE = "Secret has already been generated (race condition)."


def _text(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def _failure_response(err: SealingError) -> Response:
    f = Failure.from_error(err)
    status = HttpStatus.from_failure_code(f.code)
    if status >= 500:
        log.error("request failed code=%s detail=%s", f.code.value, f.detail)
    else:
        log.info("request rejected code=%s", f.code.value)

    body = RACE_MESSAGE if getattr(err, "raced", False) else f.redacted().message
    return _text(body, int(status))


def create_app(coordinator: SealingCoordinator) -> Flask:
    app = Flask(__name__)
    app.config["SEALING_COORDINATOR"] = coordinator

    @app.errorhandler(SealingError)
    def _on_sealing_error(err: SealingError) -> Response:
        return _failure_response(err)

    @app.post("/generate-secret")
    def generate_secret() -> Response:
        payload = request.get_json(silent=True)
        key_id = payload.get("key_id") if isinstance(payload, dict) else None
        if not isinstance(key_id, str):
            return _text(public_message(FailureCode.ERR_BAD_REQUEST), int(HttpStatus.UNPROCESSABLE))

        coordinator.seal(key_id)
        return _text("Secret generated successfully.", int(HttpStatus.OK))

    @app.get("/public-key")
    def public_key() -> Response:
        pub = coordinator.public_key()
        return jsonify({"public-key-base64": base64.b64encode(pub).decode("ascii")})

    @app.get("/health")
    def health() -> Response:
        return _text("OK", int(HttpStatus.OK))

    return app
