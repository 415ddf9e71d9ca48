"""Tests for outcome-to-response translation"""
import json

import pytest
from unittest.mock import patch

from product_api.api.responses import parse_id, require_present, to_response
from product_api.core.config import Config
from product_api.core.errors import InputError
from product_api.repositories.outcome import Failure, NotFound, Success
from product_api.schemas.product import ProductRecord


class TestToResponse:
    """Test to_response"""

    def test_success_serializes_value(self):
        record = ProductRecord(id=7, category_id=3, name="Widget", price=9.99)

        response = to_response(Success(record))

        assert response.status_code == 200
        body = json.loads(response.body)
        assert body["id"] == 7
        assert body["price"] == 9.99

    def test_success_with_empty_list(self):
        response = to_response(Success([]))
        assert response.status_code == 200
        assert json.loads(response.body) == []

    def test_not_found_is_404(self):
        response = to_response(NotFound())
        assert response.status_code == 404
        assert json.loads(response.body) == {"error": "Product not found"}

    def test_failure_passes_message_through(self):
        with patch("product_api.api.responses.logger"):
            response = to_response(Failure("connection refused"))

        assert response.status_code == 500
        assert response.body == b"connection refused"

    def test_failure_message_hidden_when_configured(self):
        settings = Config(expose_store_errors=False)
        with patch("product_api.api.responses.logger"):
            response = to_response(Failure("password authentication failed"), settings=settings)

        assert response.status_code == 500
        assert response.body == b"Internal Server Error"

    def test_unknown_outcome_is_rejected(self):
        with pytest.raises(TypeError):
            to_response({"value": 1})


class TestInputChecks:
    """Test require_present and parse_id"""

    def test_require_present_rejects_none_and_blank(self):
        with pytest.raises(InputError):
            require_present(None, "missing")
        with pytest.raises(InputError):
            require_present("  ", "missing")

    def test_require_present_accepts_empty_object(self):
        require_present({}, "missing")

    def test_parse_id(self):
        assert parse_id("42", "product id") == 42
        assert parse_id(" 7 ", "cat id") == 7

    def test_parse_id_missing(self):
        with pytest.raises(InputError, match="missing cat id"):
            parse_id("", "cat id")

    def test_parse_id_not_a_number(self):
        with pytest.raises(InputError, match="invalid product id") as exc_info:
            parse_id("abc", "product id")
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("value", ["9223372036854775808", "99999999999999999999999", "-9223372036854775809"])
    def test_parse_id_out_of_integer_range(self, value):
        with pytest.raises(InputError, match="invalid product id"):
            parse_id(value, "product id")

    def test_parse_id_at_integer_bounds(self):
        assert parse_id("9223372036854775807", "product id") == 2**63 - 1
        assert parse_id("-9223372036854775808", "product id") == -(2**63)
