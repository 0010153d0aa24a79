from decimal import Decimal

import pytest

from cadastro.validators.normalizers import (
    apply_normalizers,
    format_decimal,
    format_digits,
    format_object,
    format_string,
)


@pytest.mark.parametrize("hook", [format_string, format_digits, format_decimal])
def test_none_passes_through(hook):
    assert hook(None) is None


def test_format_string():
    assert format_string("  maria das dores ") == "MARIA DAS DORES"


def test_format_digits():
    assert format_digits("123.456.789-09") == "12345678909"
    assert format_digits("12.345.678/0001-95") == "12345678000195"


def test_format_decimal_keeps_type():
    assert format_decimal(10.456) == 10.46
    assert format_decimal(Decimal("10.455")) == Decimal("10.46")
    assert format_decimal(7) == 7


def test_format_object_applies_per_key_hooks():
    hook = format_object({"cep": format_digits, "rua": format_string})

    result = hook({"cep": "74000-100", "rua": "rua 1", "numero": "10"})

    assert result == {"cep": "74000100", "rua": "RUA 1", "numero": "10"}
    assert hook(None) is None


def test_apply_normalizers_leaves_unhooked_fields():
    payload = {"nome": "ana", "sexo": 2}

    assert apply_normalizers(payload, {"nome": format_string}) == {"nome": "ANA", "sexo": 2}
    assert payload["nome"] == "ana"
