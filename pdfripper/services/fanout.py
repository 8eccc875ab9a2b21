"""
Ограниченный пул воркеров для постраничной обработки.

Схема:
    - очередь заполняется номерами 1..N до запуска воркеров
      (ёмкости хватает на все номера — продюсер не блокируется)
    - после номеров в очередь кладётся по одному стоп-маркеру на воркер
    - воркеры (потоки ThreadPoolExecutor) разбирают очередь,
      каждый номер достаётся ровно одному воркеру
    - ошибки собираются в FirstErrorSlot: первая побеждает,
      остальные страницы всё равно обрабатываются

Отмены и таймаутов нет: прогон всегда доходит до конца очереди.
"""

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from pdfripper.exceptions import UnitExtractionError
from pdfripper.schemas import WorkerPoolConfig

logger = logging.getLogger(__name__)

# Стоп-маркер: очередь закрыта, новых номеров не будет
_CLOSED = None

UnitOperation = Callable[[int], None]


class FirstErrorSlot:
    """
    Первая ошибка прогона.

    Принадлежит одному прогону и передаётся всем его воркерам.
    Проверка "ошибка ещё не записана" и запись выполняются
    атомарно под одной блокировкой; записанное значение
    больше не меняется.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._error: Optional[Exception] = None

    def set_if_empty(self, error: Exception) -> bool:
        """
        Записывает ошибку, только если слот пуст.

        Returns:
            bool: True, если именно эта ошибка стала первой
        """
        with self._lock:
            if self._error is not None:
                return False
            self._error = error
            return True

    @property
    def error(self) -> Optional[Exception]:
        with self._lock:
            return self._error


def _worker(
    units: "queue.Queue[Optional[int]]",
    operation: UnitOperation,
    outcome: FirstErrorSlot,
    on_success: Optional[Callable[[int], None]],
) -> int:
    """
    Цикл воркера: берёт номера из очереди до стоп-маркера.

    Returns:
        int: сколько номеров обработал воркер
    """
    handled = 0

    while True:
        unit_id = units.get()
        if unit_id is _CLOSED:
            return handled

        handled += 1
        try:
            operation(unit_id)
        except Exception as e:
            error = e if isinstance(e, UnitExtractionError) else UnitExtractionError(unit_id, e)
            if outcome.set_if_empty(error):
                logger.warning(f"Ошибка стр.{unit_id}: {e}")
            else:
                logger.warning(f"Ошибка стр.{unit_id} (не первая, не попадёт в итог): {e}")
            continue

        if on_success is None:
            continue
        # Ошибка колбэка — не ошибка страницы и не повод останавливать воркер
        try:
            on_success(unit_id)
        except Exception as e:
            logger.warning(f"Ошибка обработчика успеха стр.{unit_id}: {e}")


def run_fanout(
    total_units: int,
    worker_count: int,
    operation: UnitOperation,
    on_success: Optional[Callable[[int], None]] = None,
) -> Optional[Exception]:
    """
    Вызывает operation(k) для каждого k из 1..total_units на пуле потоков.

    Алгоритм:
        1. Число воркеров = min(worker_count, total_units)
        2. total_units == 0 — сразу успех, воркеры не запускаются
        3. Очередь заполняется номерами 1..N по возрастанию и закрывается
        4. Воркеры разбирают очередь; ошибка страницы не останавливает
           остальные, в итог попадает только первая
        5. Ждём завершения всех воркеров

    Args:
        total_units: число страниц (>= 0)
        worker_count: запрошенное число воркеров (>= 1)
        operation: обработка одной страницы; исключение = ошибка страницы
        on_success: вызывается из потока воркера после успешной страницы

    Returns:
        Optional[Exception]: первая ошибка (UnitExtractionError) или None
    """
    pool = WorkerPoolConfig(total_units=total_units, worker_count=worker_count)

    if pool.total_units == 0:
        return None

    workers = pool.effective_workers
    outcome = FirstErrorSlot()

    # Ёмкость: все номера + стоп-маркер на каждого воркера
    units: "queue.Queue[Optional[int]]" = queue.Queue(maxsize=pool.total_units + workers)
    for unit_id in range(1, pool.total_units + 1):
        units.put_nowait(unit_id)
    for _ in range(workers):
        units.put_nowait(_CLOSED)

    logger.debug(f"Пул: {pool.total_units} стр., воркеров {workers}")

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pdfripper") as executor:
        futures = [
            executor.submit(_worker, units, operation, outcome, on_success)
            for _ in range(workers)
        ]
        handled = [f.result() for f in futures]

    logger.debug(f"Пул завершён: обработано по воркерам {handled}")
    return outcome.error
