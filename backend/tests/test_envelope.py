"""Tests for the GenericResponse envelope and its JSON serialization."""

import json

import pytest
from pydantic import ValidationError

from vsradmin.schemas.customer import MasterCustomer, SearchPage
from vsradmin.schemas.envelope import (
    GenericResponse,
    ResponseStatus,
    envelope_response,
    failure_response,
)


class TestGenericResponse:

    def test_success_carries_data(self):
        envelope = GenericResponse.success({"x": 1}, message="done")

        assert envelope.status is ResponseStatus.SUCCESS
        assert envelope.message == "done"
        assert envelope.data == {"x": 1}

    def test_failure_has_no_data(self):
        envelope = GenericResponse.failure("nope")

        assert envelope.status is ResponseStatus.FAILURE
        assert envelope.data is None

    def test_failure_with_data_rejected(self):
        with pytest.raises(ValidationError):
            GenericResponse(status=ResponseStatus.FAILURE, message="bad", data={"x": 1})


class TestEnvelopeResponse:

    def test_nested_models_use_wire_names(self):
        page = SearchPage(rows=[MasterCustomer(did=3, name="Harbor Grill")], totalrow=1)

        response = envelope_response(GenericResponse.success(page))
        body = json.loads(response.body)

        assert response.status_code == 200
        assert body["status"] == "Success"
        assert body["data"]["totalrow"] == 1
        assert body["data"]["rows"][0]["DID"] == 3
        assert body["data"]["rows"][0]["Name"] == "Harbor Grill"

    def test_empty_page_keeps_totalrow(self):
        response = envelope_response(GenericResponse.success(SearchPage(rows=[], totalrow=0)))

        assert json.loads(response.body)["data"] == {"rows": [], "totalrow": 0}

    def test_failure_response(self):
        response = failure_response("Invalid customer data format.", 400)
        body = json.loads(response.body)

        assert response.status_code == 400
        assert body == {"status": "Failure", "message": "Invalid customer data format.", "data": None}
