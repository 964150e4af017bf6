from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from schemas.base import RequestSchema, code_request
from utils.messages import MESSAGE_INVALID_DOB
from utils.regex import VALID_DATE, VALID_PHONE

GenderCodeRequest = code_request("genderCode")
CountryCodeRequest = code_request("countryCode")
StateCodeRequest = code_request("stateCode")
CityCodeRequest = code_request("cityCode")
ProfileCodeRequest = code_request("profileCode")


class GenderCreate(RequestSchema):
    genderName: str = Field(min_length=1, max_length=50)


class GenderUpdate(GenderCreate):
    genderCode: str = Field(min_length=1)


class CountryCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=100)
    iso2: str = Field(min_length=2, max_length=2)
    iso3: str = Field(min_length=3, max_length=3)


class CountryUpdate(CountryCreate):
    countryCode: str = Field(min_length=1)


class StateCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=100)
    iso: str = Field(min_length=1, max_length=10)
    countryCode: str = Field(min_length=1)


class StateUpdate(StateCreate):
    stateCode: str = Field(min_length=1)


class CityCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=100)
    stateCode: str = Field(min_length=1)
    countryCode: str = Field(min_length=1)


class CityUpdate(CityCreate):
    cityCode: str = Field(min_length=1)


class AddressSchema(RequestSchema):
    addressLineOne: str = Field(min_length=1)
    addressLineTwo: Optional[str] = None
    cityCode: str = Field(min_length=1)
    stateCode: str = Field(min_length=1)
    countryCode: str = Field(min_length=1)
    postalCode: str = Field(min_length=1)


class SocialSchema(RequestSchema):
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    websitePortfolioUrl: Optional[str] = None


class NotificationSchema(BaseModel):
    email: bool
    sms: bool
    push: bool


class ProfileCreate(RequestSchema):
    userCode: str = Field(min_length=1)
    firstName: str = Field(min_length=1, max_length=100)
    lastName: Optional[str] = Field(default=None, max_length=100)
    dob: str
    genderCode: str = Field(min_length=1)
    phoneNumber: str
    address: AddressSchema
    social: SocialSchema = Field(default_factory=SocialSchema)
    notification: NotificationSchema

    @field_validator("dob")
    @classmethod
    def dob_in_past(cls, value):
        if not VALID_DATE.match(value):
            raise ValueError("dob must be in YYYY-MM-DD format")
        try:
            parsed = datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            raise ValueError(MESSAGE_INVALID_DOB)
        if parsed > date.today():
            raise ValueError(MESSAGE_INVALID_DOB)
        return value

    @field_validator("phoneNumber")
    @classmethod
    def phone_format(cls, value):
        if not VALID_PHONE.match(value):
            raise ValueError("phoneNumber must start with + followed by 7 to 16 digits")
        return value


class ProfileUpdate(ProfileCreate):
    profileCode: str = Field(min_length=1)
