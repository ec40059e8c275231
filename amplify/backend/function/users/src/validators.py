import re

EMAIL_REGEX = re.compile(
    r"[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?"
)


def is_email_valid(email):
    # Unanchored search, lowercase only.
    if not isinstance(email, str):
        return False
    if len(email) < 3 or len(email) > 254:
        return False
    return EMAIL_REGEX.search(email) is not None
