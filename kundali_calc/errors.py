from enum import Enum


class ValidationReason(str, Enum):
    MISSING_FIELD       = "missing_field"
    INVALID_DATE_FORMAT = "invalid_date_format"
    INVALID_DATE        = "invalid_date"
    INVALID_TIME_FORMAT = "invalid_time_format"
    INVALID_TIME        = "invalid_time"
    INVALID_LATITUDE    = "invalid_latitude"
    INVALID_LONGITUDE   = "invalid_longitude"
    INVALID_TIMEZONE    = "invalid_timezone"


class KundaliError(Exception):
    """
    Base exception for all kundali-related domain errors.
    """
    pass


class InvalidBirthDataError(KundaliError, ValueError):
    """
    Raised when birth inputs are malformed or out of range.
    Always a caller error; `reason` says which check failed.
    """

    def __init__(self, reason: ValidationReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message

    def to_dict(self) -> dict:
        return {"error": "invalid_birth_data",
                "reason": self.reason.value,
                "message": self.message}


class UnknownTimezoneError(KundaliError, LookupError):
    """
    Raised for an unresolvable timezone identifier when strict timezone
    handling is on (development). Production falls back to the default offset.
    """
    pass
