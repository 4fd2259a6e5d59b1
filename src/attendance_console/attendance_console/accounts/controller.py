from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..container import Container
from ..web.http import SESSION_TOKEN_KEY, json_body, json_view, make_login_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)

    @app.route("/api/auth/sign-in", methods=["POST"], endpoint="sign_in")
    @json_view
    def sign_in():
        body = json_body()
        ctx = container.auth_service.sign_in(body.get("email", ""), body.get("password", ""))
        session.clear()
        session[SESSION_TOKEN_KEY] = ctx.token
        return jsonify({"success": True, "user": ctx.to_public_dict()})

    @app.route("/api/auth/sign-out", methods=["POST"], endpoint="sign_out")
    @json_view
    @login_required
    def sign_out(ctx):
        container.auth_service.sign_out(ctx)
        session.clear()
        return jsonify({"success": True, "redirect": "/login"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @json_view
    @login_required
    def me(ctx):
        return jsonify({"success": True, "user": ctx.to_public_dict()})
