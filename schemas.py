"""Request schemas.

Pydantic models for every JSON body the API accepts. Field names follow the
front end's camelCase through aliases; handlers read the snake_case
attributes.
"""
import re
from datetime import date as Date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models import TaskStatus

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')

PASSWORD_MIN_LENGTH = 6

# Column sizes in models/user.py and models/task.py
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
TITLE_MAX_LENGTH = 200


def is_valid_email(email):
    """Simple email validation"""
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_time(value):
    """Strict 24-hour HH:MM."""
    return TIME_PATTERN.fullmatch(value) is not None


def _clean_email(value):
    value = value.strip().lower()
    if not is_valid_email(value):
        raise ValueError('Formato de correo inválido')
    return value


def _clean_required_text(value, message):
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


class RequestSchema(BaseModel):
    """Base for request bodies: camelCase aliases, unknown fields ignored."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


# ---------- Auth ----------
class SignupRequest(RequestSchema):
    first_name: str = Field(alias='firstName', max_length=NAME_MAX_LENGTH)
    last_name: str = Field(alias='lastName', max_length=NAME_MAX_LENGTH)
    age: Optional[int] = Field(None, ge=0)
    email: str = Field(max_length=EMAIL_MAX_LENGTH)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)

    @field_validator('first_name', 'last_name')
    @classmethod
    def names_not_blank(cls, value):
        return _clean_required_text(value, 'El nombre es requerido')

    @field_validator('email')
    @classmethod
    def email_format(cls, value):
        return _clean_email(value)


class LoginRequest(RequestSchema):
    email: str
    password: str = Field(min_length=1)

    @field_validator('email')
    @classmethod
    def email_format(cls, value):
        return _clean_email(value)


class RecoverPasswordRequest(RequestSchema):
    email: str

    @field_validator('email')
    @classmethod
    def email_format(cls, value):
        return _clean_email(value)


class ResetPasswordRequest(RequestSchema):
    token: str = Field(min_length=1)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)


# ---------- Profile ----------
class UpdateProfileRequest(RequestSchema):
    first_name: str = Field(alias='firstName', max_length=NAME_MAX_LENGTH)
    last_name: str = Field(alias='lastName', max_length=NAME_MAX_LENGTH)
    age: int = Field(ge=13, le=120)
    email: str = Field(max_length=EMAIL_MAX_LENGTH)

    @field_validator('first_name')
    @classmethod
    def first_name_not_blank(cls, value):
        return _clean_required_text(value, 'El nombre es requerido')

    @field_validator('last_name')
    @classmethod
    def last_name_not_blank(cls, value):
        return _clean_required_text(value, 'El apellido es requerido')

    @field_validator('email')
    @classmethod
    def email_format(cls, value):
        return _clean_email(value)


class ChangePasswordRequest(RequestSchema):
    current_password: str = Field(alias='currentPassword', min_length=1)
    new_password: str = Field(alias='newPassword', min_length=PASSWORD_MIN_LENGTH)
    confirm_password: str = Field(alias='confirmPassword')

    @model_validator(mode='after')
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError('Las contraseñas no coinciden')
        return self


# ---------- Tasks ----------
def _date_part(value):
    # Front ends often send a full ISO datetime for a due date.
    if isinstance(value, str) and 'T' in value:
        return value.split('T', 1)[0]
    return value


def _clean_time(value):
    if value is None or value == '':
        return None
    if not isinstance(value, str) or not is_valid_time(value):
        raise ValueError('La hora debe tener el formato HH:MM (24 horas)')
    return value


class TaskCreateRequest(RequestSchema):
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    detail: Optional[str] = None
    date: Date
    time: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, value):
        return _clean_required_text(value, 'El título es requerido')

    @field_validator('date', mode='before')
    @classmethod
    def date_only(cls, value):
        return _date_part(value)

    @field_validator('time', mode='before')
    @classmethod
    def time_format(cls, value):
        return _clean_time(value)


class TaskUpdateRequest(RequestSchema):
    """Partial update: only the fields present in the body are applied."""
    title: Optional[str] = Field(None, max_length=TITLE_MAX_LENGTH)
    detail: Optional[str] = None
    date: Optional[Date] = None
    time: Optional[str] = None
    status: Optional[TaskStatus] = None

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, value):
        if value is None:
            raise ValueError('El título es requerido')
        return _clean_required_text(value, 'El título es requerido')

    @field_validator('date', mode='before')
    @classmethod
    def date_only(cls, value):
        if value is None:
            raise ValueError('La fecha es requerida')
        return _date_part(value)

    @field_validator('status', mode='before')
    @classmethod
    def status_not_null(cls, value):
        if value is None:
            raise ValueError('El estado es requerido')
        return value

    @field_validator('time', mode='before')
    @classmethod
    def time_format(cls, value):
        return _clean_time(value)

    def changes(self):
        return self.model_dump(exclude_unset=True)
