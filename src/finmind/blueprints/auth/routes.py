"""Registration, login, and token refresh routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_state
from ...security import current_identity, login_required
from ...services import auth as auth_service
from ..forms import json_body
from ..serializers import user_to_dict
from . import bp
from .forms import LoginForm, RegisterForm


def _auth_payload(result: auth_service.AuthResult) -> dict:
    return {"user": user_to_dict(result.user), "token": result.token}


@bp.post("/register")
def register():
    """Create an account and return it with an access token."""

    form = RegisterForm(raw_data=json_body())
    form.ensure_valid()

    state = get_state()
    result = auth_service.register(
        name=form.name,  # type: ignore[arg-type]
        email=form.email,  # type: ignore[arg-type]
        password=form.password,  # type: ignore[arg-type]
        session_factory=state.session_factory,
        tokens=state.tokens,
    )
    return jsonify(_auth_payload(result)), 201


@bp.post("/login")
def login():
    form = LoginForm(raw_data=json_body())
    form.ensure_valid()

    state = get_state()
    result = auth_service.authenticate(
        email=form.email,  # type: ignore[arg-type]
        password=form.password,  # type: ignore[arg-type]
        session_factory=state.session_factory,
        tokens=state.tokens,
    )
    return jsonify(_auth_payload(result))


@bp.post("/refresh")
@login_required
def refresh():
    """Re-issue an access token for the caller's still-valid token."""

    state = get_state()
    result = auth_service.refresh_token(
        current_identity().user_id,
        session_factory=state.session_factory,
        tokens=state.tokens,
    )
    return jsonify(_auth_payload(result))
