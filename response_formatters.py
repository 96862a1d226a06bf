# response_formatters.py
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

from constants import UI_TEXT
from models import BookingContext, Flight, Reservation, SearchParams
from validators import mask_cpf


def format_brl(value: Decimal) -> str:
    """Decimal('1500.5') -> 'R$ 1.500,50'"""
    q = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    s = f"{q:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {s}"


def _hhmm(flight: Flight) -> str:
    return f"{flight.departure_time:%H:%M} - {flight.arrival_time:%H:%M}"


def format_flight_line(flight: Flight, seats: int) -> str:
    return (
        f"- {flight.flight_number} ({flight.airline}) {_hhmm(flight)}, "
        f"{format_brl(flight.price)}, {seats} assento(s) disponível(is)"
    )


def format_flights(params: SearchParams, flights: List[Flight], seats: Dict[str, int]) -> str:
    lines = [
        UI_TEXT["flights_found"].format(
            count=len(flights),
            origin=params.origin,
            destination=params.destination,
            date=f"{params.date:%d/%m/%Y}",
        )
    ]
    for fl in flights:
        lines.append(format_flight_line(fl, seats.get(fl.flight_number, 0)))
    lines.append(UI_TEXT["choose_flight"])
    return "\n".join(lines)


def format_booking_summary(ctx: BookingContext) -> str:
    fl = ctx.flight_details
    count = len(ctx.passengers)
    total = fl.price * count
    lines = [
        "📋 Resumo da reserva",
        f"Voo {fl.flight_number} ({fl.airline}): {fl.origin} → {fl.destination}",
        f"Partida {fl.departure_time:%d/%m/%Y %H:%M}, chegada {fl.arrival_time:%d/%m/%Y %H:%M}",
        f"Tarifa: {format_brl(fl.price)} x {count} passageiro(s) = {format_brl(total)}",
        "Passageiros:",
    ]
    for i, p in enumerate(ctx.passengers, start=1):
        born = f"{p.birth_date:%d/%m/%Y}" if p.birth_date else "-"
        lines.append(f"{i}. {p.name} (RG {p.rg}, CPF {mask_cpf(p.cpf)}, nascimento {born})")
    lines.append(UI_TEXT["confirm_question"])
    return "\n".join(lines)


def format_reservation(reservation: Reservation) -> str:
    return UI_TEXT["booking_confirmed"].format(
        flight_number=reservation.flight_number,
        count=len(reservation.passengers),
        reservation_id=reservation.reservation_id,
    )
