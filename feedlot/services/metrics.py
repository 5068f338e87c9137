"""
Métricas derivadas del ledger.

Funciones puras: no tocan la BD ni lanzan excepciones. Alimentan pantallas
que no pueden romperse por datos incompletos, así que ante una división por
cero o un dato no numérico devuelven 0 (o una lista vacía / None donde se
indica).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable, List, Optional, Sequence

from feedlot.core.config import settings

MIXED_FEED_LABEL = "Mixed Feed"


def _finite(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def round2(value: float) -> float:
    return round(_finite(value), 2)


def _format_percent(value: float) -> str:
    # 5.0 -> "5", 3.3333 -> "3.33"
    value = round(value, 2)
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}"


# ---------- Ventas ----------

def sale_revenue(final_weight: float, price_per_cwt: float, head_count: int) -> float:
    """Ingreso = peso final (lbs/cabeza) * precio por quintal (100 lbs) / 100 * cabezas."""
    revenue = _finite(final_weight) * _finite(price_per_cwt) / 100 * _finite(head_count)
    return _finite(revenue)


def feed_start_date(
    plan_start_dates: Iterable[date],
    sale_date: date,
    default_days: Optional[int] = None,
) -> date:
    """
    Inicio del cebo: el plan de alimentación más antiguo del corral.
    Sin planes, estimamos `default_days` antes de la venta (periodo típico,
    settings.DEFAULT_DAYS_ON_FEED si no se indica).
    """
    starts = [d for d in plan_start_dates if d is not None]
    if starts:
        return min(starts)
    if default_days is None:
        default_days = settings.DEFAULT_DAYS_ON_FEED
    return sale_date - timedelta(days=default_days)


def days_on_feed(start_date: date, sale_date: date) -> int:
    return (sale_date - start_date).days


def average_daily_gain(starting_weight: float, final_weight: float, days: int) -> float:
    """GMD = (peso final - peso inicial) / días de cebo. 0 si los días no son positivos."""
    days = _finite(days)
    if days <= 0:
        return 0.0
    return round2((_finite(final_weight) - _finite(starting_weight)) / days)


def history_average_daily_gain(weight_history: Sequence[Any]) -> float:
    """GMD entre el primer y el último pesaje del historial."""
    if len(weight_history) < 2:
        return 0.0
    first, last = weight_history[0], weight_history[-1]
    days = (last.record_date - first.record_date).days
    return average_daily_gain(first.weight, last.weight, days)


def days_to_market(current_weight: float, market_weight: float, avg_daily_gain: float) -> Optional[int]:
    adg = _finite(avg_daily_gain)
    if adg <= 0:
        return None
    remaining = max(_finite(market_weight) - _finite(current_weight), 0.0)
    return math.ceil(remaining / adg)


# ---------- Varianza previsto / real ----------

def variance_ratio(planned: float, actual: float) -> float:
    """(real - previsto) / previsto. Con previsto = 0 devuelve 0."""
    planned = _finite(planned)
    if planned == 0:
        return 0.0
    return _finite((_finite(actual) - planned) / planned)


def variance_percent(planned: float, actual: float) -> float:
    return variance_ratio(planned, actual) * 100


@dataclass(frozen=True)
class VarianceIndicator:
    ratio: float
    percent: float
    status: str  # "on_target" | "over" | "under"
    label: str


def variance_indicator(planned: float, actual: float, tolerance_pct: float = 5.0) -> VarianceIndicator:
    ratio = variance_ratio(planned, actual)
    percent = ratio * 100

    if abs(percent) < tolerance_pct:
        return VarianceIndicator(ratio, percent, "on_target", "On Target")
    if percent > 0:
        return VarianceIndicator(ratio, percent, "over", f"Over by {_format_percent(percent)}%")
    return VarianceIndicator(ratio, percent, "under", f"Under by {_format_percent(abs(percent))}%")


# ---------- Proyección de peso ----------

@dataclass(frozen=True)
class WeightProjection:
    schedule_id: str
    schedule_name: str
    feed_type: str
    start_date: date
    end_date: date
    start_weight: float
    projected_end_weight: float

    @property
    def expected_gain(self) -> float:
        return self.projected_end_weight - self.start_weight


def weight_projection(
    pen: Any,
    plan: Any,
    avg_daily_gain: float,
    start: Optional[date] = None,
    window_days: Optional[int] = None,
) -> List[WeightProjection]:
    """
    Una ventana sintética de `window_days` por horario del plan, en el orden
    de la lista, encadenando el peso final de una con el inicial de la siguiente.

    Las fechas son una estimación: los horarios no tienen fechas propias.
    Sin `window_days` se usa settings.PROJECTION_WINDOW_DAYS.
    """
    if pen is None or plan is None:
        return []

    start = start or date.today()
    if window_days is None:
        window_days = settings.PROJECTION_WINDOW_DAYS
    adg = _finite(avg_daily_gain)
    weight = _finite(pen.current_weight)

    projections: List[WeightProjection] = []
    for index, schedule in enumerate(plan.schedules or []):
        window_start = start + timedelta(days=index * window_days)
        projected_end_weight = weight + window_days * adg

        ingredients = schedule.ingredients or []
        feed_type = ingredients[0].get("name") if ingredients else None

        projections.append(
            WeightProjection(
                schedule_id=schedule.schedule_id,
                schedule_name=f"Schedule {index + 1}",
                feed_type=feed_type or MIXED_FEED_LABEL,
                start_date=window_start,
                end_date=window_start + timedelta(days=window_days),
                start_weight=weight,
                projected_end_weight=projected_end_weight,
            )
        )
        weight = projected_end_weight

    return projections


# ---------- Dashboard ----------

@dataclass(frozen=True)
class DashboardTotals:
    total_pens: int
    total_cattle: int
    active_schedules: int


def dashboard_stats(pens: Sequence[Any], plans: Sequence[Any]) -> DashboardTotals:
    # Comparamos por valor: vale tanto para el enum como para el texto
    active = [p for p in plans if getattr(p.status, "value", p.status) == "Active"]
    return DashboardTotals(
        total_pens=len(pens),
        total_cattle=sum(int(_finite(p.current)) for p in pens),
        active_schedules=len(active),
    )


def days_from_now(change_date: date, today: date) -> int:
    return (change_date - today).days


def upcoming_changes(changes: Iterable[Any], horizon_days: int = 5) -> List[Any]:
    """Filtra el feed de cambios a los que caen dentro del horizonte."""
    return [c for c in changes if c.days_from_now <= horizon_days]
