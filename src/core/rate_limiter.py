"""Rate limiter de ventana deslizante por segmentos.

La ventana se divide en segmentos de igual duración. Los permisos concedidos
dentro de un segmento vuelven a estar disponibles cuando la ventana ha
avanzado una ventana completa desde ese segmento, no todos de golpe.

La cola admite como mucho `queue_limit` permisos en espera y se atiende en
orden de llegada; cuando está llena, las peticiones nuevas se rechazan.
"""

from __future__ import annotations

import asyncio
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable


@dataclass
class _Waiter:
    permits: int
    future: asyncio.Future[bool]


class SlidingWindowRateLimiter:
    """Control de admisión local para peticiones salientes.

    Args:
        permit_limit: permisos máximos concedidos dentro de la ventana.
        window_seconds: duración de la ventana.
        segments_per_window: segmentos en los que se divide la ventana.
        queue_limit: permisos que pueden esperar en cola (`acquire`).
        clock: reloj monotónico en segundos; inyectable para tests.
    """

    def __init__(
        self,
        *,
        permit_limit: int = 2000,
        window_seconds: float = 3600.0,
        segments_per_window: int = 20,
        queue_limit: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if permit_limit <= 0:
            raise ValueError("permit_limit must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if segments_per_window <= 0:
            raise ValueError("segments_per_window must be positive")
        if queue_limit < 0:
            raise ValueError("queue_limit must not be negative")

        self._permit_limit = permit_limit
        self._queue_limit = queue_limit
        self._segment_seconds = window_seconds / segments_per_window
        self._clock = clock

        # Permisos concedidos por segmento; el último es el segmento actual.
        self._segments: deque[int] = deque([0] * segments_per_window, maxlen=segments_per_window)
        self._available = permit_limit
        self._segment_started = clock()

        self._queue: deque[_Waiter] = deque()
        self._queued = 0
        self._timer: asyncio.TimerHandle | None = None
        self._timer_loop: asyncio.AbstractEventLoop | None = None
        self._lock = threading.Lock()

    @property
    def permit_limit(self) -> int:
        return self._permit_limit

    @property
    def available_permits(self) -> int:
        with self._lock:
            self._advance()
            return self._available

    @property
    def queued_permits(self) -> int:
        return self._queued

    def try_acquire(self, permits: int = 1) -> bool:
        """Intenta conceder `permits` sin esperar.

        Con waiters en cola devuelve False aunque haya permisos libres: la
        cola se atiende primero.
        """

        self._check_permits(permits)
        with self._lock:
            self._advance()
            self._serve_queue()
            if self._queue:
                return False
            return self._grant(permits)

    async def acquire(self, permits: int = 1) -> bool:
        """Concede `permits`, esperando en cola si hay sitio.

        Devuelve False inmediatamente cuando la cola está llena.
        """

        self._check_permits(permits)
        with self._lock:
            self._advance()
            self._serve_queue()
            if not self._queue and self._grant(permits):
                return True
            if self._queued + permits > self._queue_limit:
                return False
            future: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
            waiter = _Waiter(permits=permits, future=future)
            self._queue.append(waiter)
            self._queued += permits
            self._schedule_wakeup()

        try:
            return await future
        except asyncio.CancelledError:
            with self._lock:
                if waiter in self._queue:
                    self._queue.remove(waiter)
                    self._queued -= waiter.permits
                if not self._queue:
                    self._cancel_wakeup()
            raise

    def try_replenish(self) -> bool:
        """Avanza la ventana según el reloj y atiende la cola.

        Devuelve True si al menos un segmento caducó.
        """

        with self._lock:
            advanced = self._advance()
            self._serve_queue()
            return advanced

    def _check_permits(self, permits: int) -> None:
        if permits <= 0 or permits > self._permit_limit:
            raise ValueError(f"permits must be between 1 and {self._permit_limit}, got {permits}")

    def _grant(self, permits: int) -> bool:
        if self._available < permits:
            return False
        self._available -= permits
        self._segments[-1] += permits
        return True

    def _advance(self) -> bool:
        elapsed = self._clock() - self._segment_started
        steps = int(elapsed // self._segment_seconds)
        if steps <= 0:
            return False

        for _ in range(min(steps, len(self._segments))):
            # `maxlen` descarta el segmento más antiguo al añadir uno nuevo.
            self._available += self._segments[0]
            self._segments.append(0)
        self._segment_started += steps * self._segment_seconds
        return True

    def _serve_queue(self) -> None:
        while self._queue:
            head = self._queue[0]
            if head.future.done() or head.future.get_loop().is_closed():
                self._queue.popleft()
                self._queued -= head.permits
                continue
            if not self._grant(head.permits):
                break
            self._queue.popleft()
            self._queued -= head.permits
            head.future.set_result(True)

    def _schedule_wakeup(self) -> None:
        loop = asyncio.get_running_loop()
        if self._timer is not None and not self._timer.cancelled() and self._timer_loop is loop:
            return
        # Un timer de otro loop (ya cerrado) no despertaría a nadie.
        self._cancel_wakeup()
        delay = max(0.0, self._segment_started + self._segment_seconds - self._clock())
        self._timer = loop.call_later(delay, self._on_wakeup)
        self._timer_loop = loop

    def _cancel_wakeup(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._timer_loop = None

    def _on_wakeup(self) -> None:
        with self._lock:
            self._timer = None
            self._timer_loop = None
            self._advance()
            self._serve_queue()
            if self._queue:
                self._schedule_wakeup()
