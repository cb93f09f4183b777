"""Profile routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_state
from ...security import current_identity
from ...services import auth as auth_service
from ..auth.forms import ProfileForm
from ..forms import json_body
from ..serializers import user_to_dict
from . import bp


@bp.get("/profile")
def get_profile():
    user = auth_service.get_profile(current_identity().user_id, get_state().session_factory)
    return jsonify(user_to_dict(user))


@bp.put("/profile")
def update_profile():
    """Update name and/or avatar; omitted fields are left unchanged."""

    form = ProfileForm(raw_data=json_body())
    form.ensure_valid()
    user = auth_service.update_profile(
        current_identity().user_id,
        name=form.name,
        avatar=form.avatar,
        session_factory=get_state().session_factory,
    )
    return jsonify(user_to_dict(user))
