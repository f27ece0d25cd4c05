"""Sample identities, credentials and check definitions shared by test suites."""

OWNER = "5551234567"
OTHER = "5559876543"
PASSWORD = "correct horse"
PROFILE = {"first_name": "Ada", "last_name": "Lovelace", "agreed_to_terms": True}

HTTP_CHECK = {
    "protocol": "https",
    "url": "example.com/status",
    "method": "get",
    "success_codes": [200, 201],
    "timeout_seconds": 3,
}
