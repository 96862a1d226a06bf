import re
import unicodedata
from datetime import date, datetime
from typing import Optional

from models import SearchParams

# 1) Remoção de acentos
def strip_accents(text: str) -> str:
    return "".join(
        ch for ch in unicodedata.normalize("NFD", text)
        if unicodedata.category(ch) != "Mn"
    )

# 2) Normalização (minúsculas, sem acentos, espaços colapsados)
def normalize_text(text: str) -> str:
    t = strip_accents(text or "").lower()
    return re.sub(r"\s+", " ", t).strip()


# 3) Origem / destino / data: "de <origem> para <destino> em <data>"
_PLACE = r"[A-Za-zÀ-ÿ'\-\s]"
ORIGIN_RE = re.compile(rf"\bde\s+({_PLACE}+?)(?:\s+para\s+|$)", re.IGNORECASE)
DESTINATION_RE = re.compile(rf"\bpara\s+({_PLACE}+?)(?:\s+em\s+|$)", re.IGNORECASE)
NUMERIC_DATE_RE = re.compile(r"\bem\s+(\d{2}/\d{2}/\d{4})\b", re.IGNORECASE)
LONG_DATE_RE = re.compile(r"\b(\d{1,2})\s+de\s+([a-zç]+)\s+de\s+(\d{4})\b", re.IGNORECASE)

MONTHS_PT = {
    "janeiro": 1, "fevereiro": 2, "marco": 3, "abril": 4,
    "maio": 5, "junho": 6, "julho": 7, "agosto": 8,
    "setembro": 9, "outubro": 10, "novembro": 11, "dezembro": 12,
}


def parse_numeric_date(value: str) -> Optional[date]:
    try:
        return datetime.strptime(value, "%d/%m/%Y").date()
    except ValueError:
        return None


def parse_long_date(day: str, month_name: str, year: str) -> Optional[date]:
    month = MONTHS_PT.get(normalize_text(month_name))
    if not month:
        return None
    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None


def extract_date(text: str) -> Optional[date]:
    m = NUMERIC_DATE_RE.search(text or "")
    if m:
        return parse_numeric_date(m.group(1))
    m = LONG_DATE_RE.search(text or "")
    if m:
        return parse_long_date(m.group(1), m.group(2), m.group(3))
    return None


def extract_search_params(text: str) -> SearchParams:
    """
    Extrai origem, destino e data de frases como
    "de São Paulo para Rio de Janeiro em 28/05/2025".
    Match parcial devolve parâmetros com is_valid == False.
    """
    text = text or ""
    om = ORIGIN_RE.search(text)
    dm = DESTINATION_RE.search(text)
    origin = om.group(1).strip() if om else None
    destination = dm.group(1).strip() if dm else None
    return SearchParams(
        origin=origin or None,
        destination=destination or None,
        date=extract_date(text),
    )


# 4) Número de voo: duas letras + dígitos (AZ101, TP2023, GO34094)
FLIGHT_NUMBER_RE = re.compile(r"\b([A-Za-z]{2}\d{3,5})\b")


def extract_flight_number(text: str) -> Optional[str]:
    m = FLIGHT_NUMBER_RE.search(text or "")
    return m.group(1).upper() if m else None


# 5) Quantidade de passageiros
INTEGER_TOKEN_RE = re.compile(r"\b\d+\b")
LEADING_INTEGER_RE = re.compile(r"-?\d+")


def has_integer_token(text: str) -> bool:
    return bool(INTEGER_TOKEN_RE.search(text or ""))


def extract_passenger_count(text: str) -> Optional[int]:
    m = LEADING_INTEGER_RE.search(text or "")
    return int(m.group(0)) if m else None


# 6) Sim / não
AFFIRMATIVE_RE = re.compile(r"\bsim\b", re.IGNORECASE)
NEGATIVE_RE = re.compile(r"\b(não|nao)\b", re.IGNORECASE)


def is_affirmative(text: str) -> bool:
    return bool(AFFIRMATIVE_RE.search(text or ""))


def is_negative(text: str) -> bool:
    return bool(NEGATIVE_RE.search(text or ""))
