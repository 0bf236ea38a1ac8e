"""User-facing error catalogue.

Messages are grouped by feature domain. Lookups fall back to the domain's own
``UNKNOWN``, then to the shared ``general`` pool and finally to
``general.UNKNOWN``.
"""

from __future__ import annotations

ERROR_MESSAGES: dict[str, dict[str, str]] = {
    "general": {
        "NETWORK": "There was a connection problem. Check the network and try again.",
        "SERVER": "A server error occurred. Please try again.",
        "UNKNOWN": "Something went wrong. Please try again.",
    },
    "auth": {
        "INVALID_CREDENTIALS": "Wrong e-mail or password.",
        "SESSION_EXPIRED": "The sign-in took too long. Please sign in again.",
        "FORBIDDEN": "You do not have access to this action.",
        "ROLE_MISSING": "Your account has no role assigned.",
    },
    "children": {
        "CREATE_FAILED": "Could not create the child. Please try again.",
        "UPDATE_FAILED": "Could not update the child's information. Please try again.",
        "LOAD_FAILED": "Could not load the list of children.",
        "NOT_FOUND": "The child could not be found.",
    },
    "parents": {
        "CREATE_FAILED": "Could not create the guardian.",
        "UPDATE_FAILED": "Could not update the guardian.",
        "LOAD_FAILED": "Could not load the guardian.",
    },
    "events": {
        "CREATE_FAILED": "Could not create the event.",
        "LOAD_FAILED": "Could not load events.",
    },
    "image": {
        "UPLOAD_FAILED": "Could not upload the image. Please try again.",
        "LOAD_FAILED": "Could not load the image.",
    },
    "checkInOut": {
        "ALREADY_CHECKED_IN": "The child is already checked in.",
        "NOT_CHECKED_IN": "The child is not checked in.",
        "NO_CHILD_SELECTED": "Select a child before checking in or out.",
        "UNKNOWN": "Could not update the check-in status.",
    },
    "absence": {
        "CREATE_FAILED": "Could not register the absence.",
        "LOAD_FAILED": "Could not load the absence overview.",
    },
    "calendar": {
        "LOAD_FAILED": "Could not load the calendar.",
    },
    "guestLink": {
        "NO_CHILD": "No child selected.",
        "MISSING_FIELDS": "Enter a name and a phone number.",
        "CREATE_FAILED": "Could not send the guest link. Please try again.",
    },
}


def get_error_message(domain: str, code: str) -> str:
    domain_messages = ERROR_MESSAGES.get(domain, {})
    general = ERROR_MESSAGES["general"]
    return (
        domain_messages.get(code)
        or domain_messages.get("UNKNOWN")
        or general.get(code)
        or general["UNKNOWN"]
    )
