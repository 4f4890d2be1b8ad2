"""Builders shared by the portal tests."""

import json
from datetime import datetime, timedelta, timezone

import requests

from contracts_api.schemas import ContractFile

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_contract(name: str, minutes: int = 0, size: int = 10, contract_id: str = None) -> ContractFile:
    contract_id = contract_id or f"id-{name}"
    return ContractFile(
        id=contract_id,
        name=name,
        size=size,
        url=f"http://testserver/blobs/{name}",
        uploaded_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_response(status_code: int, body=None, content: bytes = None) -> requests.Response:
    """A fully read `requests.Response` with the given JSON body or raw content."""
    response = requests.Response()
    response.status_code = status_code
    if body is not None:
        response._content = json.dumps(body).encode()
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = content or b""
    response._content_consumed = True
    return response


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
