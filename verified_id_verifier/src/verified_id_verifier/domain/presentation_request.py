"""Presentation request builder

Builds the createPresentationRequest body for one session by merging the
static template from configuration with the per-session callback addressing.
"""

import copy
from typing import Any, Dict

from verified_id_verifier.domain.value_objects import SessionId
from verified_id_verifier.domain.verifier_config import CALLBACK_API_KEY_HEADER, VerifierConfig


def build_presentation_request(config: VerifierConfig, session_id: SessionId) -> Dict[str, Any]:
    """
    Build the outbound presentation request payload.

    The template is copied so the configured template is never modified.
    The callback state carries the session id; the request service echoes it
    back in every callback, which is how the callback is correlated with the
    session. The api-key header is only filled in when the template declares
    a headers object and a key is configured.

    Args:
        config: Verifier configuration holding the template
        session_id: Session the request is created for

    Returns:
        JSON-serializable request body
    """
    payload = copy.deepcopy(config.presentation_template)

    payload["authority"] = config.authority

    registration = payload.setdefault("registration", {})
    registration["clientName"] = config.client_name

    callback = payload.setdefault("callback", {})
    callback["url"] = config.get_callback_url()
    callback["state"] = session_id.value
    headers = callback.get("headers")
    if isinstance(headers, dict):
        if config.callback_api_key:
            headers[CALLBACK_API_KEY_HEADER] = config.callback_api_key
        else:
            headers.pop(CALLBACK_API_KEY_HEADER, None)
            if not headers:
                del callback["headers"]

    requested = payload["requestedCredentials"][0]
    requested["type"] = config.credential_type
    requested["purpose"] = config.purpose
    requested["acceptedIssuers"] = list(config.accepted_issuers)

    return payload
