# tests/test_response_formatters.py

from datetime import date
from decimal import Decimal

from conftest import make_flight
from models import BookingContext, Passenger, Reservation, SearchParams
from response_formatters import format_booking_summary, format_brl, format_flights, format_reservation


def test_format_brl():
    assert format_brl(Decimal("350")) == "R$ 350,00"
    assert format_brl(Decimal("1500.5")) == "R$ 1.500,50"
    assert format_brl(Decimal("1234567.899")) == "R$ 1.234.567,90"


def test_format_flights():
    params = SearchParams(origin="São Paulo", destination="Rio de Janeiro", date=date(2025, 5, 28))
    text = format_flights(params, [make_flight()], {"GO34094": 7})
    lines = text.splitlines()
    assert "28/05/2025" in lines[0]
    assert lines[1] == "- GO34094 (GOL) 08:00 - 09:05, R$ 350,00, 7 assento(s) disponível(is)"
    assert "número do voo" in lines[-1]


def test_format_booking_summary():
    ctx = BookingContext(
        flight_number="GO34094",
        flight_details=make_flight(),
        passenger_count=2,
        passengers=[
            Passenger(name="Maria Silva", rg="123456789", cpf="52998224725", birth_date=date(1990, 1, 1)),
            Passenger(name="João Souza", rg="987654321", cpf="390.533.447-05", birth_date=date(1985, 7, 3)),
        ],
    )
    text = format_booking_summary(ctx)
    assert "R$ 350,00 x 2 passageiro(s) = R$ 700,00" in text
    assert "1. Maria Silva (RG 123456789, CPF ***.982.***-25, nascimento 01/01/1990)" in text
    assert "52998224725" not in text
    assert text.endswith("(responda 'sim' ou 'não')")


def test_format_reservation():
    r = Reservation(flight_number="GO34094", flight_details=make_flight(), user_id="u1",
                    passengers=[Passenger(name="Ana")], confirmed=True)
    text = format_reservation(r)
    assert r.reservation_id in text
    assert "1 passageiro" in text
