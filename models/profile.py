from models.base import Document
from pipelines import PROFILE_PIPELINE


def thumbnail_url(url):
    """Cloudinary serves a 200px wide rendition under /upload/w_200."""
    return url.replace("/upload", "/upload/w_200") if url else url


class Profile(Document):
    collection_name = "profiles"
    code_field = "profileCode"
    code_entity = "profile"
    pipeline = PROFILE_PIPELINE

    def __init__(self, user_id, first_name, last_name, picture, dob, gender_id,
                 phone_number, address, social=None, notification=None, **kwargs):
        super().__init__(**kwargs)
        self.user_id = user_id
        self.first_name = first_name
        self.last_name = last_name
        self.picture = Profile.picture_document(picture)
        self.dob = dob
        self.gender_id = gender_id
        self.phone_number = phone_number
        # {addressLineOne, addressLineTwo, city, state, country, postalCode}
        self.address = address
        self.social = social or {}
        self.notification = notification or {"email": True, "sms": False, "push": False}

    def fields(self):
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "profilePicture": self.picture,
            "dob": self.dob,
            "gender": self.gender_id,
            "phoneNumber": self.phone_number,
            "address": self.address,
            "social": self.social,
            "notification": self.notification,
            "user": self.user_id,
        }

    @staticmethod
    def picture_document(picture):
        if not picture:
            return None
        return {
            "url": picture["url"],
            "filename": picture["filename"],
            "thumbnail": thumbnail_url(picture["url"]),
        }

    @staticmethod
    def find_by_user(user_id):
        return Profile.collection().find_one({"user": user_id})

    @staticmethod
    def find_by_phone(phone_number, exclude_code=None):
        query = {"phoneNumber": phone_number}
        if exclude_code:
            query["profileCode"] = {"$ne": exclude_code}
        return Profile.collection().find_one(query)
