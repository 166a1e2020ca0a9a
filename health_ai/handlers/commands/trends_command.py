#!/usr/bin/env python3
"""
Command handler for metric trends.

Renders the daily series of one metric over a week or a month, followed by
its total and daily average.
"""

from typing import Sequence

from telegram import Update
from telegram.ext import CallbackContext, CommandHandler

from health_ai.handlers.base.private_handler import PrivateHandler
from health_ai.health.aggregator import chart_data, local_now
from health_ai.health.fetcher import HealthDataFetcher
from health_ai.health.metric_store import MetricStore
from health_ai.health.models import InvalidWindowError, MetricKind
from health_ai.health.summary import format_chart_lines, summary

RANGE_ALIASES = {"week": 7, "month": 30}

USAGE = "Usage: /trends [metric] [week|month|days]\nMetrics: " + ", ".join(kind.value for kind in MetricKind)


def _parse_range(raw: str) -> int:
    normalized = raw.strip().lower()
    if normalized in RANGE_ALIASES:
        return RANGE_ALIASES[normalized]
    try:
        return int(normalized)
    except ValueError:
        raise ValueError(f"Unknown range '{raw}'. Use week, month or a number of days") from None


def _is_range(raw: str) -> bool:
    normalized = raw.strip().lower()
    return normalized in RANGE_ALIASES or normalized.lstrip("-").isdigit()


def parse_trends_args(args: Sequence[str], default_range_days: int) -> tuple[MetricKind, int]:
    """
    Parse ``/trends`` arguments into a metric kind and window size.

    Args:
        args: Command arguments, metric first and range second, both optional.
            A single argument that looks like a range (``week``, ``month`` or
            a number) is taken as the range for steps.
        default_range_days: Window used when no range is given.

    Returns:
        The metric kind (steps by default) and the number of days.

    Raises:
        ValueError: If the metric name is unknown or the range is not a number or alias.
        InvalidWindowError: If the range is not positive.
    """
    if len(args) == 1 and _is_range(args[0]):
        args = [MetricKind.STEPS.value, args[0]]

    kind = MetricKind.parse(args[0]) if args else MetricKind.STEPS
    range_days = _parse_range(args[1]) if len(args) > 1 else default_range_days

    if range_days < 1:
        raise InvalidWindowError(range_days)
    return kind, range_days


class TrendsHandler(PrivateHandler):
    """
    Handler for the /trends command.

    Refreshes the metric store and replies with the chart series and summary
    of the requested metric.
    """

    def __init__(
        self, owner_user_id: int, store: MetricStore, fetcher: HealthDataFetcher, default_range_days: int = 7
    ) -> None:
        super().__init__(owner_user_id)
        self.store = store
        self.fetcher = fetcher
        self.default_range_days = default_range_days

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        try:
            kind, range_days = parse_trends_args(context.args or [], self.default_range_days)
        except ValueError as e:
            await update.message.reply_text(f"{e}\n\n{USAGE}")
            return

        now = local_now()
        await self.fetcher.fetch_all_data(self.store, now)
        points = chart_data(self.store, kind, range_days, now)

        reply = [f"{kind.label}, last {range_days} days\n"]
        reply.extend(format_chart_lines(points, range_days))
        reply.append("")
        reply.append(summary(self.store, kind, range_days, now))
        await update.message.reply_text("\n".join(reply))


def get_trends_command(
    owner_user_id: int, store: MetricStore, fetcher: HealthDataFetcher, default_range_days: int = 7
) -> CommandHandler:
    handler = TrendsHandler(owner_user_id, store, fetcher, default_range_days)
    return CommandHandler("trends", handler.handle)
