"""Signaling endpoint, aiohttp-based.

``POST /echo-api/offer`` takes ``{"sdp": <offer>}`` and replies with
``{"sdp": <answer>, "candidates": [...]}`` or ``{"code", "description"}``.
"""

from __future__ import annotations

import logging

from aiohttp import web

from webrtc_echo.config import Settings
from webrtc_echo.sdp.errors import SdpError
from webrtc_echo.sdp.fields import Failure
from webrtc_echo.sdp.grammar import parse_sdp
from webrtc_echo.sdp.serialize import serialize_sdp
from webrtc_echo.webrtc.answer import host_candidate, make_answer
from webrtc_echo.webrtc.bundle import extract_bundles

logger = logging.getLogger(__name__)

_settings_key = web.AppKey("settings", Settings)

OFFER_PATH = "/echo-api/offer"


def _error(code: int, description: str) -> web.Response:
    return web.json_response({"code": code, "description": description}, status=code)


async def _offer_handler(request: web.Request) -> web.Response:
    try:
        return await _answer_offer(request)
    except Exception:
        logger.exception("Unexpected exception")
        return _error(500, "Internal server error")


async def _answer_offer(request: web.Request) -> web.Response:
    settings = request.app[_settings_key]

    if request.content_type != "application/json":
        return _error(406, "Not acceptable")
    try:
        payload = await request.json()
    except ValueError as exc:
        logger.warning("Failed to parse JSON payload: %s", exc)
        return _error(400, "Bad request")

    offer_text = payload.get("sdp") if isinstance(payload, dict) else None
    if not isinstance(offer_text, str):
        return _error(400, "Missing sdp")

    outcome = parse_sdp(offer_text)
    if isinstance(outcome, Failure):
        logger.warning("Rejected offer: %s", outcome.description)
        return _error(400, outcome.description)
    offer = outcome.value

    try:
        bundles = extract_bundles(offer)
    except SdpError as exc:
        logger.warning("Rejected offer: %s", exc)
        return _error(400, str(exc))

    for bundle in bundles:
        logger.info(
            "Bundle %s: ufrag=%s setup=%s",
            " ".join(bundle.mids),
            bundle.ice.ufrag,
            bundle.dtls.setup,
        )

    answer = make_answer(offer)
    candidates = [
        host_candidate(
            settings.media_address, settings.media_port, settings.candidate_protocol
        )
    ]
    return web.json_response({"sdp": serialize_sdp(answer), "candidates": candidates})


def create_app(settings: Settings) -> web.Application:
    app = web.Application()
    app[_settings_key] = settings
    app.router.add_post(OFFER_PATH, _offer_handler)
    return app


async def serve(app: web.Application) -> web.AppRunner:
    """Listen on the HTTP address from the app's settings.

    The caller owns the returned runner and must ``cleanup()`` it.
    """
    settings = app[_settings_key]
    runner = web.AppRunner(app)
    await runner.setup()
    await web.TCPSite(runner, settings.http_host, settings.http_port).start()
    logger.info(
        "Accepting offers on http://%s:%d%s",
        settings.http_host,
        settings.http_port,
        OFFER_PATH,
    )
    return runner
