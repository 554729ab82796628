"""Events — уведомления обменного движка.

Каждая успешная операция публикует одно событие. Подписчики вызываются
синхронно, в порядке подписки, после фиксации состояния.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeConfigUpdated:
    """Конфигурация комиссии изменена (хранятся входные значения)."""

    fee_factor: int
    fee_decimals: int
    exit_multiplier: int

    event_type = "fee_config_updated"


@dataclass(frozen=True)
class Pawned:
    account: str
    unit_amount: int
    paid_wei: int
    fee_wei: int

    event_type = "pawned"


@dataclass(frozen=True)
class Redeemed:
    account: str
    unit_amount: int
    payout_wei: int
    fee_wei: int

    event_type = "redeemed"


@dataclass(frozen=True)
class RevenueClaimed:
    owner: str
    amount_wei: int

    event_type = "revenue_claimed"


ExchangeEvent = Union[FeeConfigUpdated, Pawned, Redeemed, RevenueClaimed]
EventListener = Callable[[ExchangeEvent], None]


def event_to_dict(event: ExchangeEvent) -> Dict[str, Any]:
    """Сериализация события: {"event": <type>, ...поля}."""
    return {"event": event.event_type, **asdict(event)}


class EventLog:
    """История событий + синхронные подписчики."""

    def __init__(self) -> None:
        self._events: List[ExchangeEvent] = []
        self._listeners: List[EventListener] = []

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Подписка; возвращает функцию отписки."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: ExchangeEvent) -> None:
        self._events.append(event)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # Состояние уже зафиксировано: ошибка подписчика не отменяет операцию
                logger.exception("event listener failed on %s", event.event_type)

    @property
    def events(self) -> List[ExchangeEvent]:
        return list(self._events)

    def of_type(self, event_cls: type) -> List[ExchangeEvent]:
        return [e for e in self._events if isinstance(e, event_cls)]
