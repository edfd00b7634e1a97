"""
Gold card eligibility and projection.

A provider earns a payer's gold card (exemption from PA review) once both the
approval rate and the order volume over the payer's lookback window meet the
payer's thresholds.
"""

import calendar
import logging
import math
import re
from datetime import datetime, UTC
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .. import config
from ..models import (
    GoldCardThreshold,
    GoldCardStatus,
    GoldCardTrend,
    PayerResolution,
    EligibilityHistoryItem,
    ValidationUtils,
)
from ..reference_data import get_gold_card_thresholds, get_payer_aliases

logger = logging.getLogger(__name__)

TREND_WINDOW = 3
TREND_DELTA = 1.0
MIN_MONTHLY_GAIN = 0.5
DEFAULT_MONTHLY_GAIN = 1.0

RateHistory = Sequence[Union[float, EligibilityHistoryItem]]


def _rates(history: Optional[RateHistory]) -> List[float]:
    if not history:
        return []
    return [h.rate if isinstance(h, EligibilityHistoryItem) else float(h) for h in history]


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def add_months(moment: datetime, months: int) -> datetime:
    """Advance by calendar months, clamping the day to the target month's end."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def compute_trend(history: Optional[RateHistory]) -> GoldCardTrend:
    """Compare the mean of the last three points with the three before them."""
    rates = _rates(history)
    if len(rates) < 2:
        return GoldCardTrend.STABLE

    recent = rates[-TREND_WINDOW:]
    older = rates[-2 * TREND_WINDOW:-TREND_WINDOW]
    recent_avg = _mean(recent)
    older_avg = _mean(older) if older else recent_avg

    delta = recent_avg - older_avg
    if delta > TREND_DELTA:
        return GoldCardTrend.IMPROVING
    if delta < -TREND_DELTA:
        return GoldCardTrend.DECLINING
    return GoldCardTrend.STABLE


def project_eligibility_date(
    current_rate: float,
    threshold: float,
    trend: GoldCardTrend,
    history: Optional[RateHistory],
    now: datetime,
) -> Optional[datetime]:
    """Project when an improving provider reaches the approval-rate threshold.

    History points are assumed to be one month apart. Returns None when the
    provider is already at the threshold or is not improving.
    """
    if current_rate >= threshold:
        return None
    if trend != GoldCardTrend.IMPROVING:
        return None

    rates = _rates(history)
    monthly_gain = DEFAULT_MONTHLY_GAIN
    if len(rates) >= 2:
        monthly_gain = max(MIN_MONTHLY_GAIN, rates[-1] - rates[-2])

    months_to_eligible = math.ceil((threshold - current_rate) / monthly_gain)
    return add_months(ValidationUtils.ensure_utc(now), months_to_eligible)


class GoldCardEligibilityEvaluator:
    """Evaluates provider gold-card eligibility against payer thresholds."""

    def __init__(
        self,
        thresholds: Optional[Dict[str, GoldCardThreshold]] = None,
        aliases: Optional[List[Tuple[str, str]]] = None,
        default_payer: Optional[str] = None,
    ):
        self.thresholds = thresholds if thresholds is not None else get_gold_card_thresholds()
        self.aliases = [
            (re.compile(pattern, re.IGNORECASE), payer)
            for pattern, payer in (aliases if aliases is not None else get_payer_aliases())
        ]
        self.default_payer = default_payer or config.DEFAULT_PAYER
        if self.default_payer not in self.thresholds:
            raise ValueError(f"Default payer {self.default_payer!r} has no threshold entry")

    def resolve_payer(self, payer_id: Optional[str]) -> PayerResolution:
        """Canonicalize a free-text payer identifier.

        Unrecognized identifiers fall back to the default payer with
        ``matched=False`` so callers can tell that a fallback happened.
        """
        raw = payer_id or ""
        text = ValidationUtils.sanitize_string(raw)

        if text in self.thresholds:
            return PayerResolution(raw=raw, payer_key=text, matched=True)
        for pattern, payer in self.aliases:
            if pattern.search(text):
                return PayerResolution(raw=raw, payer_key=payer, matched=True)

        logger.warning(
            f"Unrecognized payer {raw!r}; using {self.default_payer} gold card threshold"
        )
        return PayerResolution(raw=raw, payer_key=self.default_payer, matched=False)

    def evaluate(
        self,
        approval_rate: float,
        order_count: int,
        payer_id: Optional[str],
        history: Optional[RateHistory] = None,
        now: Optional[datetime] = None,
    ) -> GoldCardStatus:
        """Evaluate eligibility for a provider's rate (percent) and order volume."""
        resolution = self.resolve_payer(payer_id)
        threshold = self.thresholds[resolution.payer_key]

        rate = max(0.0, min(100.0, float(approval_rate)))
        orders = max(0, math.floor(order_count))

        met_rate = rate >= threshold.approval_rate_percent
        met_orders = orders >= threshold.min_order_count

        trend = compute_trend(history)
        projected = project_eligibility_date(
            rate,
            threshold.approval_rate_percent,
            trend,
            history,
            now or datetime.now(UTC),
        )

        status = GoldCardStatus(
            eligible=met_rate and met_orders,
            payer_id=resolution.payer_key,
            approval_rate=rate,
            order_count=orders,
            threshold=threshold,
            gap_to_rate=round(max(0.0, threshold.approval_rate_percent - rate), 1),
            gap_to_orders=max(0, threshold.min_order_count - orders),
            met_rate=met_rate,
            met_orders=met_orders,
            resolution=resolution,
            trend=trend,
            projected_eligibility_date=projected,
        )
        logger.debug(
            f"Gold card {resolution.payer_key}: rate={rate} orders={orders} "
            f"eligible={status.eligible} trend={status.trend}"
        )
        return status


_default_evaluator: Optional[GoldCardEligibilityEvaluator] = None


def _get_evaluator() -> GoldCardEligibilityEvaluator:
    global _default_evaluator
    if _default_evaluator is None:
        _default_evaluator = GoldCardEligibilityEvaluator()
    return _default_evaluator


def evaluate_gold_card(
    approval_rate: float,
    order_count: int,
    payer_id: Optional[str],
    history: Optional[RateHistory] = None,
    now: Optional[datetime] = None,
) -> GoldCardStatus:
    """Evaluate gold-card eligibility with the shipped payer table."""
    return _get_evaluator().evaluate(approval_rate, order_count, payer_id, history, now)
