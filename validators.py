# validators.py
"""
Validações dos dados de passageiro (nome, RG, CPF, data de nascimento).

Funções puras: não tocam na sessão nem em serviços externos, o fluxo de
coleta decide o que fazer com o resultado.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

MIN_NAME_CHARS = 3
MIN_RG_CHARS = 8
MIN_AGE_YEARS = 2

_NON_DIGIT_RE = re.compile(r"[^0-9]")
_NON_ALNUM_RE = re.compile(r"[^0-9A-Za-z]")
_BIRTH_DATE_RE = re.compile(r"^\s*(\d{2})/(\d{2})/(\d{4})\s*$")


def only_digits(value: str) -> str:
    return _NON_DIGIT_RE.sub("", value or "")


def _cpf_check_digit(digits: str) -> int:
    # pesos n+1..2 sobre os primeiros n dígitos
    weight = len(digits) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(digits))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def validate_cpf(cpf: str) -> bool:
    """CPF com 11 dígitos, não repetidos, e os dois dígitos verificadores mod 11."""
    digits = only_digits(cpf)
    if len(digits) != 11:
        return False
    if len(set(digits)) == 1:
        return False
    if _cpf_check_digit(digits[:9]) != int(digits[9]):
        return False
    return _cpf_check_digit(digits[:10]) == int(digits[10])


def validate_rg(rg: str) -> bool:
    return len(_NON_ALNUM_RE.sub("", rg or "")) >= MIN_RG_CHARS


def validate_name(name: str) -> bool:
    return len((name or "").strip()) >= MIN_NAME_CHARS


def _add_years(d: date, years: int) -> date:
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        # 29/02 em ano não bissexto
        return d.replace(year=d.year + years, day=28)


def validate_birth_date(birth_date: date, today: Optional[date] = None) -> bool:
    """Não pode ser futura e o passageiro precisa ter pelo menos 2 anos."""
    today = today or date.today()
    if birth_date > today:
        return False
    return _add_years(birth_date, MIN_AGE_YEARS) <= today


def parse_birth_date(text: str) -> Optional[date]:
    """Aceita apenas dd/mm/aaaa; qualquer outra coisa devolve None."""
    if not _BIRTH_DATE_RE.match(text or ""):
        return None
    try:
        return datetime.strptime(text.strip(), "%d/%m/%Y").date()
    except ValueError:
        return None


def mask_cpf(cpf: str) -> str:
    digits = only_digits(cpf)
    if len(digits) != 11:
        return "***"
    return f"***.{digits[3:6]}.***-{digits[9:]}"
