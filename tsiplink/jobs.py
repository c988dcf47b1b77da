import asyncio
from typing import Callable, List, Optional

from tsiplink.config import get_settings
from tsiplink.parsing.framing import FeedResult
from tsiplink.parsing.reports import ReportKind
from tsiplink.receiver import TsipReceiver


class JobManager:
    def __init__(self):
        self.tasks: List[asyncio.Task] = []

    def start(self, coro, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self.tasks.append(task)
        return task

    async def stop(self):
        for task in self.tasks:
            task.cancel()
        for task in self.tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.tasks.clear()


def create_byte_queue(max_size: Optional[int] = None) -> "asyncio.Queue[bytes]":
    if max_size is None:
        max_size = get_settings().queue_max_size
    return asyncio.Queue(maxsize=max_size)


async def feed_job(
    receiver: TsipReceiver,
    queue: "asyncio.Queue[bytes]",
    stop_event: asyncio.Event,
    on_report: Optional[Callable[[ReportKind], None]] = None,
    poll_interval: float = 0.1,
):
    """
    Sole consumer of ``receiver``: drains byte chunks put on ``queue`` by any
    number of producers and feeds them in arrival order.

    Runs until ``stop_event`` is set and the queue is empty.

    A byte the receiver rejects is logged as ``feed_failed`` and skipped; the
    rest of its chunk is still fed. ``on_report`` runs once per completed
    report and a failing callback is logged as ``report_callback_failed``
    without affecting later reports.
    """
    while not (stop_event.is_set() and queue.empty()):
        try:
            chunk = await asyncio.wait_for(queue.get(), timeout=poll_interval)
        except asyncio.TimeoutError:
            continue
        try:
            for byte in chunk:
                try:
                    result = receiver.feed(byte)
                except (TypeError, ValueError) as exc:
                    receiver.logger.error("feed_failed", extra={"details": {"error": str(exc)}})
                    continue
                if result is FeedResult.REPORT_COMPLETED and on_report is not None:
                    _notify(receiver, on_report, receiver.last_kind)
        finally:
            queue.task_done()


def _notify(receiver: TsipReceiver, on_report: Callable[[ReportKind], None], kind: ReportKind) -> None:
    try:
        on_report(kind)
    except Exception as exc:
        receiver.logger.error(
            "report_callback_failed",
            extra={"details": {"kind": kind.name, "error": str(exc)}},
        )
