import base64
import binascii
import json
import logging

import user
from user import (
    FetchFailed,
    InvalidEmail,
    InvalidUserData,
    UnmarshalFailed,
    UserAlreadyExists,
    UserDoesNotExist,
    UserError,
)

logger = logging.getLogger(__name__)

HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def response(status, body=None):
    return {
        "statusCode": status,
        "headers": dict(HEADERS),
        "body": "" if body is None else json.dumps(body),
    }


def error_response(status, error):
    if status >= 500:
        logger.error("Responding %s %s: %s", status, error.kind, error)
    else:
        logger.warning("Responding %s %s: %s", status, error.kind, error)
    return response(status, {"error": str(error)})


def query_param(event, name):
    return (event.get("queryStringParameters") or {}).get(name)


def request_body(event):
    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        body = base64.b64decode(body, validate=True)
    return body


def get_user(event, table):
    email = query_param(event, "email")
    try:
        if email:
            result = user.fetch_user(email, table)
            if result is None:
                return error_response(404, UserDoesNotExist())
            return response(200, result.to_dict())

        return response(200, [u.to_dict() for u in user.fetch_all_users(table)])
    except (FetchFailed, UnmarshalFailed) as e:
        return error_response(500, e)


def create_user(event, table):
    try:
        result = user.create_user(request_body(event), table)
    except binascii.Error:
        return error_response(400, InvalidUserData())
    except (InvalidUserData, InvalidEmail) as e:
        return error_response(400, e)
    except UserAlreadyExists as e:
        return error_response(409, e)
    except UserError as e:
        return error_response(500, e)

    return response(201, result.to_dict())


def update_user(event, table):
    try:
        result = user.update_user(request_body(event), table)
    except binascii.Error:
        return error_response(400, UnmarshalFailed())
    except (UnmarshalFailed, InvalidEmail) as e:
        return error_response(400, e)
    except UserDoesNotExist as e:
        return error_response(404, e)
    except UserError as e:
        return error_response(500, e)

    return response(200, result.to_dict())


def delete_user(event, table):
    try:
        user.delete_user(query_param(event, "email"), table)
    except UserError as e:
        return error_response(500, e)

    return response(200)


def unhandled_method():
    return response(405, {"error": "method not allowed"})
