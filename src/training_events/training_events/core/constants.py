"""Constants and defaults.

Note: Keep table names and message keys here to avoid literals spread across code.
"""

ATTENDANCE_TABLE = "trainingevent_users"
EVENT_TABLE = "trainingevent"

# requesttype value sent by the form when a user asks again after a denial.
REQUEST_AGAIN = 2

MESSAGES = {
    "attend_successful": "You are now attending this training event.",
    "attend_waitlist_successful": "You have been added to the waiting list for this training event.",
    "request_success": "Your request to attend has been sent for approval.",
    "requestagain_success": "Your request to attend has been sent for approval again.",
    "unattend_successful": "You are no longer attending this training event.",
    "removerequest_successful": "Your request to attend has been removed.",
    "updateattendance_successful": "Your booking has been updated.",
    "updatefailed": "Could not update the training event attendance.",
    "invalidcoursemodule": "Training event has no course module.",
    "approve_successful": "Request approved.",
    "deny_successful": "Request denied.",
}


def message(key: str) -> str:
    return MESSAGES.get(key, key)
