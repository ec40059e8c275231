"""User records stored in the users DynamoDB table, keyed by email."""

import json
import logging
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError

from validators import is_email_valid

logger = logging.getLogger(__name__)

STORE_ERRORS = (ClientError, BotoCoreError)


class UserError(Exception):
    """Base class for every failure raised by the user operations."""

    message = "user operation failed"

    def __init__(self, message=None):
        super().__init__(message or self.message)

    @property
    def kind(self):
        return type(self).__name__


class FetchFailed(UserError):
    message = "failed to fetch record"


class UnmarshalFailed(UserError):
    message = "failed to unmarshal record"


class MarshalFailed(UserError):
    message = "could not marshal record"


class InvalidUserData(UserError):
    message = "invalid user data"


class InvalidEmail(UserError):
    message = "invalid email"


class PutFailed(UserError):
    message = "could not put item"


class UserAlreadyExists(UserError):
    message = "user already exists"


class UserDoesNotExist(UserError):
    message = "user does not exist"


class UpdateFailed(UserError):
    message = "could not update record"


class DeleteFailed(UserError):
    message = "could not delete record"


@dataclass
class User:
    email: str = ""
    first_name: str = ""
    last_name: str = ""

    # attribute name -> dataclass field, shared by the JSON body and the item
    FIELDS = {"email": "email", "firstName": "first_name", "lastName": "last_name"}

    @classmethod
    def from_mapping(cls, data):
        if not isinstance(data, dict):
            raise ValueError("expected an object, got %s" % type(data).__name__)
        values = {}
        for name, field in cls.FIELDS.items():
            value = data.get(name, "")
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ValueError("%s must be a string" % name)
            values[field] = value
        return cls(**values)

    @classmethod
    def from_json(cls, raw_body):
        """Decode a str or bytes request body. Raises ValueError on anything that is not a user object."""
        if raw_body is None:
            raise ValueError("empty body")
        return cls.from_mapping(json.loads(raw_body))

    @classmethod
    def from_item(cls, item):
        try:
            return cls.from_mapping(item)
        except ValueError as e:
            logger.error("Could not decode item %r: %s", item, e)
            raise UnmarshalFailed() from e

    def to_dict(self):
        return {name: getattr(self, field) for name, field in self.FIELDS.items()}

    def to_item(self):
        item = self.to_dict()
        if not all(isinstance(value, str) for value in item.values()):
            raise MarshalFailed()
        return item


def _is_condition_failure(error):
    return (
        isinstance(error, ClientError)
        and error.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"
    )


def fetch_user(email, table):
    """Point lookup by email. Returns None when no record exists."""
    try:
        response = table.get_item(Key={"email": email})
    except STORE_ERRORS as e:
        logger.error("get_item failed for %s: %s", email, e)
        raise FetchFailed() from e

    item = response.get("Item")
    if not item:
        return None
    return User.from_item(item)


def fetch_all_users(table):
    """Single unpaginated scan of the table."""
    try:
        response = table.scan()
    except STORE_ERRORS as e:
        logger.error("scan failed: %s", e)
        raise FetchFailed() from e

    return [User.from_item(item) for item in response.get("Items", [])]


def create_user(raw_body, table):
    try:
        u = User.from_json(raw_body)
    except ValueError as e:
        raise InvalidUserData() from e

    if not is_email_valid(u.email):
        raise InvalidEmail()

    if fetch_user(u.email, table) is not None:
        raise UserAlreadyExists()

    # The condition covers a concurrent create between the lookup and the put.
    try:
        table.put_item(
            Item=u.to_item(),
            ConditionExpression="attribute_not_exists(email)",
        )
    except STORE_ERRORS as e:
        if _is_condition_failure(e):
            raise UserAlreadyExists() from e
        logger.error("put_item failed for %s: %s", u.email, e)
        raise PutFailed() from e

    logger.info("Created user %s", u.email)
    return u


def update_user(raw_body, table):
    try:
        u = User.from_json(raw_body)
    except ValueError as e:
        raise UnmarshalFailed() from e

    if not is_email_valid(u.email):
        raise InvalidEmail()

    if fetch_user(u.email, table) is None:
        raise UserDoesNotExist()

    try:
        table.put_item(
            Item=u.to_item(),
            ConditionExpression="attribute_exists(email)",
        )
    except STORE_ERRORS as e:
        if _is_condition_failure(e):
            raise UserDoesNotExist() from e
        logger.error("put_item failed for %s: %s", u.email, e)
        raise UpdateFailed() from e

    logger.info("Updated user %s", u.email)
    return u


def delete_user(email, table):
    try:
        table.delete_item(Key={"email": email})
    except STORE_ERRORS as e:
        logger.error("delete_item failed for %s: %s", email, e)
        raise DeleteFailed() from e

    logger.info("Deleted user %s", email)
