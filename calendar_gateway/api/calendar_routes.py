"""Calendar OAuth and event-creation routes, one set per provider tag."""

from flask import Blueprint, current_app, jsonify, redirect, request

from calendar_gateway.services.calendar import (
    authenticate,
    build_authorization_url,
    create_calendar_event,
    get_provider,
)
from calendar_gateway.utils.error_handler import handle_errors
from calendar_gateway.utils.logging_utils import get_logger

logger = get_logger(__name__)

calendar_bp = Blueprint('calendar', __name__)


def _providers():
    return current_app.extensions["calendar_providers"]


@calendar_bp.route("/<provider>/auth", methods=["GET"])
@handle_errors("Failed to generate auth URL")
def calendar_auth(provider: str):
    """Redirect to the provider's consent screen."""
    calendar_provider = get_provider(_providers(), provider)
    auth_url = build_authorization_url(calendar_provider)
    logger.info(f"Redirecting to {provider} consent screen")
    return redirect(auth_url)


@calendar_bp.route("/<provider>/callback", methods=["GET"])
@handle_errors("Authentication failed")
def calendar_callback(provider: str):
    """Exchange the one-time authorization code for a credential."""
    calendar_provider = get_provider(_providers(), provider)
    body = authenticate(calendar_provider, request.args.get("code"))
    logger.info(f"Authenticated with {provider}")
    return jsonify(body), 200


@calendar_bp.route("/<provider>/create-event", methods=["POST"])
@handle_errors("Failed to create event")
def calendar_create_event(provider: str):
    """Create a calendar event with the given provider."""
    calendar_provider = get_provider(_providers(), provider)
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        data = {}
    body = create_calendar_event(calendar_provider, data)
    return jsonify(body), 201
