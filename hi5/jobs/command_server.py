"""HTTP entrypoint for the /hi5 Slack slash command (Cloud Run / Cloud Functions friendly)."""

from __future__ import annotations

import hmac
import logging
import os
from typing import Any, Iterator, Optional

from flask import Flask, Request, Response, jsonify, request
from werkzeug.exceptions import ClientDisconnected

from hi5.core.command import BadRequest, ValidationError, decode_request, parse_command
from hi5.core.config import Settings, get_settings
from hi5.etl.blocks import help_text, not_found_payload, results_payload
from hi5.etl.transform import to_businesses
from hi5.models import Query
from hi5.vendors.slack import SlackPublishError, post_message
from hi5.vendors.yelp import YelpError, business_search

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

BAD_REQUEST_TEXT = "Bad request"
INTERNAL_ERROR_TEXT = "Internal Server Error"
PREFLIGHT_MAX_AGE = "3600"


class CommandHandler:
    """Serves one slash-command invocation per call to :meth:`handle`.

    The reply happens in two phases. Input problems are answered
    synchronously with a status code. Once the request is accepted, a 200 is
    committed and the search and Slack delivery run while the body streams,
    so later failures only show up in the logs and as body text.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def handle(self, req: Request) -> Response:
        logger.info("Request received: method=%s", req.method)

        if req.method == "OPTIONS":
            return self.preflight()

        try:
            body = req.get_data(cache=False)
        except ClientDisconnected:
            logger.warning("Failed to read request body")
            return self._respond(BAD_REQUEST_TEXT, 400)

        try:
            incoming = decode_request(body)
        except BadRequest as exc:
            logger.warning("Failed to decode body query string: %s", exc)
            return self._respond(BAD_REQUEST_TEXT, 400)

        try:
            query = parse_command(incoming)
        except ValidationError as exc:
            logger.info("Rejected command from %s: %s", incoming.user_name, exc)
            return self._respond(str(exc), 200)

        if not self.is_authorized(query.token):
            logger.warning("Unauthorized request")
            return self._respond("", 200)

        return self._respond(self.deliver(query), 200)

    def preflight(self) -> Response:
        response = self._respond("", 204)
        response.headers["Access-Control-Allow-Methods"] = "POST"
        response.headers["Access-Control-Max-Age"] = PREFLIGHT_MAX_AGE
        return response

    def is_authorized(self, token: str) -> bool:
        expected = self.settings.slack_token
        if not expected:
            return False
        return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))

    def deliver(self, query: Query) -> Iterator[str]:
        """Run the search and post the reply; yields text for the open response body."""
        # An empty first chunk commits the 200 before the slow work starts.
        yield ""

        if query.help:
            yield help_text()
            return

        try:
            payload = business_search(query, self.settings.yelp_api_key, timeout=self.settings.http_timeout)
        except YelpError:
            logger.exception("Error getting %s data", query.category)
            yield INTERNAL_ERROR_TEXT
            return

        businesses = to_businesses(payload)
        if businesses:
            logger.info("Found %d results for %s", len(businesses), query.category)
            message = results_payload(query, businesses)
        else:
            logger.info("Did not find any results for %s", query.category)
            message = not_found_payload(query)

        try:
            post_message(query.response_url, message, timeout=self.settings.http_timeout)
        except SlackPublishError:
            logger.exception("Failed to post %s results to Slack", query.category)
            yield INTERNAL_ERROR_TEXT

    def _respond(self, body: Any, status: int) -> Response:
        response = Response(body, status=status, mimetype="text/plain")
        response.headers["Access-Control-Allow-Origin"] = self.settings.allowed_origin
        return response


# ---------- App ----------


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or get_settings()
    handler = CommandHandler(settings)

    flask_app = Flask(__name__)
    flask_app.extensions["hi5_handler"] = handler

    @flask_app.route("/", methods=["POST", "OPTIONS"])
    def slash_command() -> Any:
        return handler.handle(request)

    @flask_app.get("/healthz")
    def healthcheck() -> Any:
        """Lightweight health endpoint; does not call Yelp or Slack."""
        return (
            jsonify(
                {
                    "status": "ok",
                    "revision": os.getenv("K_REVISION", "unknown"),
                    "region": os.getenv("X_GOOGLE_RUNTIMEREGION", "unknown"),
                }
            ),
            200,
        )

    return flask_app


app = create_app()


def hi5(req: Request) -> Response:
    """Cloud Functions entry point."""
    return app.extensions["hi5_handler"].handle(req)


def main() -> None:
    env_port = os.getenv("PORT")
    logger.info("[BOOT] ENV PORT=%s", env_port)

    port = int(env_port or get_settings().port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)

    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
