from childcare_system.core.error_messages import ERROR_MESSAGES, get_error_message


def test_domain_message_is_used_when_present():
    assert get_error_message("absence", "CREATE_FAILED") == ERROR_MESSAGES["absence"]["CREATE_FAILED"]


def test_falls_back_to_general_then_unknown():
    assert get_error_message("children", "SERVER") == ERROR_MESSAGES["general"]["SERVER"]
    assert get_error_message("nope", "NETWORK") == ERROR_MESSAGES["general"]["NETWORK"]
    assert get_error_message("children", "NOPE") == ERROR_MESSAGES["general"]["UNKNOWN"]


def test_domain_unknown_is_preferred_over_general():
    assert get_error_message("checkInOut", "NOPE") == ERROR_MESSAGES["checkInOut"]["UNKNOWN"]
    assert get_error_message("checkInOut", "SERVER") == ERROR_MESSAGES["checkInOut"]["UNKNOWN"]
    assert get_error_message("calendar", "NOPE") == ERROR_MESSAGES["general"]["UNKNOWN"]
