"""
Agregador de cumplimiento: estado por día a partir de los registros de dosis
"""
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from dosetrack.core.clock import Clock
from dosetrack.core.config import get_settings
from dosetrack.core.exceptions import ValidationError
from dosetrack.models.dose_log import DoseLog
from dosetrack.schemas.adherence import (
    AdherenceSummary,
    AdherenceWindow,
    DayStatus,
    DayStatusValue
)

DEFAULT_WINDOW_DAYS = 7


class AdherenceAggregator:
    """
    Deriva la secuencia de estados diarios de un medicamento.

    Los registros se agrupan por el día calendario de logged_at en la zona
    de referencia del reloj. Dentro de cada día manda el registro con mayor
    (logged_at, id): un registro posterior sustituye al anterior y, con el
    mismo instante, gana el insertado después.
    """

    def __init__(self, clock: Clock, max_days: Optional[int] = None, compliance_threshold: Optional[float] = None):
        settings = get_settings()
        self.clock = clock
        self.max_days = max_days or settings.MAX_WINDOW_DAYS
        self.compliance_threshold = (
            settings.COMPLIANCE_THRESHOLD if compliance_threshold is None else compliance_threshold
        )

    def winners_by_day(self, entries: Iterable[DoseLog]) -> Dict[date, DoseLog]:
        """Registro vigente de cada día"""
        winners: Dict[date, DoseLog] = {}
        for entry in entries:
            day = self.clock.day_of(entry.logged_at)
            current = winners.get(day)
            if current is None or entry.sort_key > current.sort_key:
                winners[day] = entry
        return winners

    def window_dates(self, days: int = DEFAULT_WINDOW_DAYS) -> List[date]:
        """Días de la ventana, del más antiguo a hoy"""
        if not isinstance(days, int) or days < 1 or days > self.max_days:
            raise ValidationError(f"La ventana debe tener entre 1 y {self.max_days} días")

        today = self.clock.today()
        return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    def window(self, entries: Iterable[DoseLog], days: int = DEFAULT_WINDOW_DAYS) -> List[DayStatus]:
        """Estados de los últimos `days` días terminando hoy"""
        dates = self.window_dates(days)
        winners = self.winners_by_day(entries)

        statuses = []
        for index, day in enumerate(dates):
            winner = winners.get(day)
            if winner is None:
                statuses.append(DayStatus(day_index=index, date=day, status=DayStatusValue.PENDING))
            else:
                statuses.append(DayStatus(
                    day_index=index,
                    date=day,
                    status=DayStatusValue(winner.status.value),
                    dose_log_id=winner.id
                ))
        return statuses

    def summarize(self, statuses: List[DayStatus]) -> AdherenceSummary:
        """Conteos y tasa de cumplimiento de una ventana"""
        taken = sum(1 for s in statuses if s.status == DayStatusValue.TAKEN)
        missed = sum(1 for s in statuses if s.status == DayStatusValue.MISSED)
        pending = len(statuses) - taken - missed

        recorded = taken + missed
        compliance_rate = round(taken / recorded * 100, 1) if recorded else 0.0

        return AdherenceSummary(
            taken=taken,
            missed=missed,
            pending=pending,
            compliance_rate=compliance_rate,
            below_threshold=bool(recorded) and compliance_rate < self.compliance_threshold
        )

    def build_window(self, medication_id: int, entries: Iterable[DoseLog], days: int = DEFAULT_WINDOW_DAYS) -> AdherenceWindow:
        """Ventana completa con resumen"""
        statuses = self.window(entries, days)
        return AdherenceWindow(
            medication_id=medication_id,
            days=days,
            start_date=statuses[0].date,
            end_date=statuses[-1].date,
            timezone=self.clock.tz_name,
            statuses=statuses,
            summary=self.summarize(statuses)
        )
