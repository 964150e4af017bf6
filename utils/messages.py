"""
utils/messages.py
-----------------
User-facing response messages. Every CRUD entity shares the same family of
messages, built by EntityMessages; auth/user/profile specific ones are
spelled out below.
"""


class EntityMessages:

    def __init__(self, singular, plural, taken=None):
        self.singular = singular
        self.plural = plural
        title, titles = singular.capitalize(), plural.capitalize()

        self.get_all = f"{titles} retrieved successfully"
        self.get_one = f"{title} retrieved successfully"
        self.not_found = f"The selected {singular} could not be found"
        self.exist = f"{title} already exist. Please try a different one"
        self.taken = taken or f"{title} name already taken. Please try a different one."
        self.created = f"{title} created successfully"
        self.updated = f"{title} updated successfully"
        self.deleted = f"{title} deleted successfully"
        self.delete_error = f"Couldn't delete the {singular}"
        self.in_use = f"The selected {singular} is in use and not allowed to be deleted."
        self.not_allowed_delete = f"The selected {singular} is not allowed to be deleted"

    def none_under(self, parent):
        return f"There are no {self.plural} available under the given {parent}"

    def not_found_under(self, parent):
        return f"The selected {self.singular} could not be found in the selected {parent}"


# ── General ───────────────────────────────────────────────
MESSAGE_PAGE_NOT_FOUND = "Page Not Found"
MESSAGE_SOMETHING_WENT_WRONG = "Something went wrong"
MESSAGE_ACCESS_DENIED_NO_ROLES = "Access denied. No role assigned."
MESSAGE_ACCESS_DENIED_NO_PERMISSION = "Access denied. Permission required."
MESSAGE_NOT_LOGGED_IN_YET = "You must be signed in first!"
MESSAGE_INVALID_BODY = "Request body must be a JSON object"

# ── Auth / users ──────────────────────────────────────────
MESSAGE_USER_REGISTER_SUCCESS = "User Registered Successfully"
MESSAGE_UNAUTHENTICATED = "Authentication failed"
MESSAGE_NOT_AUTHORIZED = "Unauthorized action"
MESSAGE_USER_LOGIN_SUCCESS = "User Logged in Successfully"
MESSAGE_USER_LOGOUT_SUCCESS = "Logged out successfully"
MESSAGE_MISSING_REQUIRED_FIELDS = "Missing one or more required fields"
MESSAGE_INVALID_EMAIL_FORMAT = "Invalid email format"
MESSAGE_PASSWORD_CONSTRAINTS_NOT_MET = "The password doesn't meet the required strength or length"
MESSAGE_EMAIL_USERNAME_EXIST = "Username or email already taken. Please try a different one"
MESSAGE_EMAIL_USERNAME_NOT_EXIST = "Username or email not registered"
MESSAGE_OLD_PASSWORD_ERROR = "Old password incorrect"
MESSAGE_PASSWORD_CHANGE_SUCCESS = "Password changed successfully"

# ── Roles / permissions ───────────────────────────────────
MESSAGE_ROLE_PERMISSION_NOT_FOUND = "One or more of the permissions listed are not valid"

# ── Profiles ──────────────────────────────────────────────
MESSAGE_PROFILE_EXIST = "Profile already created"
MESSAGE_OWN_PROFILE_NOT_FOUND = "Profile is not created yet for you"
MESSAGE_PROFILE_NOT_FOUND_UNDER_USER = "There is no profile found under the selected user"
MESSAGE_PHONE_NUMBER_TAKEN = "Phone number already taken. Please try a different one"
MESSAGE_INVALID_DOB = "Date of birth must be a valid past date"

# ── Uploads / exports ─────────────────────────────────────
MESSAGE_FILE_REQUIRED = "A profile picture is required"
MESSAGE_FILE_TYPE_NOT_ALLOWED = "Only jpg, jpeg, png, svg, webp and avif images are allowed"
MESSAGE_FILE_TOO_LARGE = "The file exceeds the maximum allowed size"
MESSAGE_UPLOAD_FAILED = "Couldn't upload the file"
MESSAGE_EXPORT_FORMAT_NOT_SUPPORTED = "Export format must be one of csv, xlsx or pdf"


PERMISSION = EntityMessages("permission", "permissions")
ROLE = EntityMessages("role", "roles")
USER = EntityMessages("user", "users")
PROFILE = EntityMessages("profile", "profiles")
AUDIT = EntityMessages("log entry", "log entries")
GENDER = EntityMessages("gender", "genders")
COUNTRY = EntityMessages(
    "country", "countries",
    taken="Country name (or) iso2 (or) iso3 already taken. Please try a different one.",
)
STATE = EntityMessages(
    "state", "states",
    taken="State name (or) iso already taken. Please try a different one.",
)
CITY = EntityMessages("city", "cities")
CLASS = EntityMessages("class", "classes")
SECTION = EntityMessages("section", "sections")
SUBJECT = EntityMessages("subject", "subjects")
STUDENT = EntityMessages(
    "student", "students",
    taken="Student roll number already taken. Please try a different one.",
)
EXAM = EntityMessages(
    "exam", "exams",
    taken="Exam title already taken. Please try a different one.",
)
MARK = EntityMessages(
    "mark", "marks",
    taken="Mark already recorded for this student, exam and subject.",
)
QUESTION = EntityMessages(
    "question", "questions",
    taken="A question with this level and total already exists.",
)
