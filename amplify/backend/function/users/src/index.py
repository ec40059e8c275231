import json
import logging
import os

import boto3

import handlers


def log_level(name):
    # Unknown names fall back to INFO.
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


logger = logging.getLogger()
logger.setLevel(log_level(os.environ.get("LOG_LEVEL")))

region = os.environ.get("AWS_REGION", "eu-west-1")
table_name = os.environ.get("STORAGE_USERS_NAME", "LambdaInGoUser")

# Built once per container and reused by warm invocations.
dynamodb = boto3.resource(
    "dynamodb",
    region_name=region,
    endpoint_url=os.environ.get("DYNAMODB_ENDPOINT_URL") or None,
)
users_table = dynamodb.Table(table_name)

ROUTES = {
    "GET": handlers.get_user,
    "POST": handlers.create_user,
    "PUT": handlers.update_user,
    "DELETE": handlers.delete_user,
}


def handler(event, context, table=None):
    method = event.get("httpMethod")
    logger.info(
        "Event received: method=%s query=%s",
        method,
        json.dumps(event.get("queryStringParameters")),
    )

    route = ROUTES.get(method)
    if route is None:
        return handlers.unhandled_method()

    try:
        return route(event, users_table if table is None else table)
    except Exception:
        logger.exception("Unhandled error for %s", method)
        return handlers.response(500, {"error": "internal server error"})
