import re

VALID_EMAIL = re.compile(r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$")

# at least 12 characters with one lowercase letter and one digit
VALID_PASSWORD = re.compile(r"^(?=.*[a-z])(?=.*\d).{12,}$")

VALID_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

VALID_PHONE = re.compile(r"^[+]{1}(?:[0-9\-\(\)\/.]\s?){6,15}[0-9]{1}$")


def trim_and_test(value, pattern):
    return bool(value and value.strip() and pattern.match(value.strip()))
