"""Record Schemas — verifies payload models generated from descriptors."""

from datetime import date

import pytest
from pydantic import ValidationError

from ministry_api.core.entities import ASSET, CHURCH, PERSON, STATS
from ministry_api.schemas.records import payload_model


def test_model_is_cached_per_descriptor():
    assert payload_model(CHURCH) is payload_model(CHURCH)
    assert payload_model(CHURCH) is not payload_model(PERSON)


def test_only_sent_fields_are_returned():
    body = payload_model(CHURCH)(churchName="Grace")
    assert body.to_values() == {"churchName": "Grace"}


def test_unknown_keys_are_ignored():
    body = payload_model(CHURCH).model_validate({"churchName": "G", "bogus": 1})
    assert body.to_values() == {"churchName": "G"}


def test_numbers_accepted_for_text_fields():
    body = payload_model(PERSON).model_validate({"contactNumber": 771234567})
    assert body.to_values() == {"contactNumber": "771234567"}


def test_blank_non_text_fields_become_null():
    body = payload_model(ASSET).model_validate({
        "purchase_date": "", "purchase_price": " ", "location_id": "",
    })
    assert body.to_values() == {
        "purchase_date": None, "purchase_price": None, "location_id": None,
    }


def test_dates_and_integers_are_parsed():
    body = payload_model(STATS).model_validate({"churchId": "4", "date": "2024-03-10"})
    assert body.to_values() == {"churchId": 4, "date": date(2024, 3, 10)}


def test_bad_integer_rejected():
    with pytest.raises(ValidationError):
        payload_model(STATS).model_validate({"adult": "many"})


def test_overlong_text_rejected():
    with pytest.raises(ValidationError):
        payload_model(PERSON).model_validate({"gender": "x" * 21})


@pytest.mark.parametrize("value", [2**31, -(2**31) - 1, 99999999999999999999])
def test_integers_outside_column_range_rejected(value):
    with pytest.raises(ValidationError):
        payload_model(PERSON).model_validate({"amount": value})


def test_integer_column_limits_accepted():
    body = payload_model(PERSON).model_validate({"amount": 2**31 - 1, "regContribution": -(2**31)})
    assert body.to_values() == {"amount": 2**31 - 1, "regContribution": -(2**31)}
