import copy
import os

import pytest
from botocore.exceptions import ClientError

os.environ.setdefault("AWS_REGION", "eu-west-1")
os.environ.setdefault("STORAGE_USERS_NAME", "users-test")


def client_error(code, operation):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB Table keyed by email."""

    def __init__(self):
        self.items = {}
        self.failing = set()

    def _check(self, operation):
        if operation in self.failing:
            raise client_error("InternalServerError", operation)

    def get_item(self, Key):
        self._check("GetItem")
        item = self.items.get(Key["email"])
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def scan(self):
        self._check("Scan")
        return {"Items": [copy.deepcopy(item) for item in self.items.values()]}

    def put_item(self, Item, ConditionExpression=None):
        self._check("PutItem")
        exists = Item["email"] in self.items
        if ConditionExpression == "attribute_not_exists(email)" and exists:
            raise client_error("ConditionalCheckFailedException", "PutItem")
        if ConditionExpression == "attribute_exists(email)" and not exists:
            raise client_error("ConditionalCheckFailedException", "PutItem")
        self.items[Item["email"]] = copy.deepcopy(Item)
        return {}

    def delete_item(self, Key):
        self._check("DeleteItem")
        if not isinstance(Key["email"], str):
            raise client_error("ValidationException", "DeleteItem")
        self.items.pop(Key["email"], None)
        return {}


@pytest.fixture()
def table():
    return FakeTable()


@pytest.fixture()
def seeded_table(table):
    table.items["jane@example.com"] = {
        "email": "jane@example.com",
        "firstName": "Jane",
        "lastName": "Doe",
    }
    return table
