# tests/test_nlp_utils.py

from datetime import date

import pytest

from nlp_utils import (
    extract_date,
    extract_flight_number,
    extract_passenger_count,
    extract_search_params,
    has_integer_token,
    is_affirmative,
    is_negative,
    normalize_text,
)


def test_normalize_text():
    assert normalize_text("  Olá   MUNDO ") == "ola mundo"
    assert normalize_text("Não, obrigação") == "nao, obrigacao"


def test_extract_search_params_full():
    p = extract_search_params("de São Paulo para Rio de Janeiro em 28/05/2025")
    assert p.origin == "São Paulo"
    assert p.destination == "Rio de Janeiro"
    assert p.date == date(2025, 5, 28)
    assert p.is_valid


def test_extract_search_params_with_verb_and_lowercase():
    p = extract_search_params("buscar voo de rio de janeiro para são paulo em 01/06/2025")
    assert p.origin == "rio de janeiro"
    assert p.destination == "são paulo"
    assert p.date == date(2025, 6, 1)


@pytest.mark.parametrize("text", [
    "de São Paulo para Rio",
    "para Rio de Janeiro em 28/05/2025",
    "de São Paulo em 28/05/2025",
    "de São Paulo para Rio de Janeiro em 31/02/2025",
    "quero viajar",
])
def test_partial_params_are_invalid(text):
    assert not extract_search_params(text).is_valid


def test_long_form_date():
    assert extract_date("de Recife para Natal em 28 de maio de 2025") == date(2025, 5, 28)
    assert extract_date("em 3 de março de 2026") == date(2026, 3, 3)
    assert extract_date("em 30 de fevereiro de 2026") is None
    assert extract_date("em 3 de brumário de 2026") is None
    p = extract_search_params("de Recife para Natal em 28 de maio de 2025")
    assert (p.origin, p.destination) == ("Recife", "Natal")
    assert p.is_valid


@pytest.mark.parametrize("text,expected", [
    ("AZ101", "AZ101"),
    ("quero o go34094", "GO34094"),
    ("voo tp2023 por favor", "TP2023"),
    ("AZ12", None),
    ("AZ123456", None),
    ("XAZ101", None),
    ("", None),
])
def test_extract_flight_number(text, expected):
    assert extract_flight_number(text) == expected


def test_passenger_count_extraction():
    assert extract_passenger_count("3") == 3
    assert extract_passenger_count("somos 4 pessoas") == 4
    assert extract_passenger_count("-2") == -2
    assert extract_passenger_count("três") is None
    assert has_integer_token("0")
    assert not has_integer_token("AZ101")


def test_yes_no():
    assert is_affirmative("sim, confirmo")
    assert is_affirmative("SIM")
    assert not is_affirmative("simples")
    assert is_negative("não")
    assert is_negative("nao quero")
    assert not is_negative("nação")
