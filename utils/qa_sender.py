"""
QA Sender
Runs one send cycle: select devices, render content, write the broadcast
"""
import threading
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Union
from zoneinfo import ZoneInfo
from flask import current_app

from utils.device_selector import select_devices, DataAccessError
from utils.template_renderer import render_content, collect_locales, TemplateError
from utils.message_writer import MessageWriter, PersistenceError, SEND_AT_FORMAT
from utils.message_checker import MessageChecker, NoopMessageChecker


class QASender:
    """Sends QA broadcasts to a fixed device roster and keeps recent results"""

    def __init__(
        self,
        devices: Iterable[Union[Dict, str]],
        min_battery_level: int,
        message_content: Optional[Dict[str, str]],
        writer: MessageWriter,
        checker: Optional[MessageChecker] = None,
        timezone: str = 'Asia/Hong_Kong',
        history_size: int = 10
    ):
        """
        Args:
            devices: Roster entries, dicts with a barcode or bare barcodes
            min_battery_level: Minimum battery level to be targeted
            message_content: Mapping of locale to template string
            writer: Writer for the message rows
            checker: Collaborator called with the history after each send
            timezone: IANA zone used for send timestamps
            history_size: Number of results to keep
        """
        self.devices = list(devices)
        self.barcodes = [d['barcode'] if isinstance(d, dict) else d for d in self.devices]
        self.min_battery_level = min_battery_level
        self.message_content = message_content or {}
        self.writer = writer
        self.checker = checker or NoopMessageChecker()
        self.timezone = ZoneInfo(timezone)
        self.history_size = history_size

        self._history: List[Dict] = []
        self._running = threading.Lock()

    @classmethod
    def from_config(cls, config) -> 'QASender':
        """Build a sender from a Flask config mapping"""
        return cls(
            devices=config['QA_DEVICES'],
            min_battery_level=config['MIN_BATTERY_LVL'],
            message_content=config['MESSAGE_CONTENT'],
            writer=MessageWriter(user_id=config['MESSAGE_USER']),
            timezone=config['TIMEZONE'],
            history_size=config['SEND_HISTORY_SIZE']
        )

    @property
    def history(self) -> List[Dict]:
        """Recent send results, oldest first"""
        return list(self._history)

    @property
    def is_running(self) -> bool:
        return self._running.locked()

    def now(self) -> datetime:
        """Current local time in the configured zone, without tzinfo"""
        return datetime.now(self.timezone).replace(tzinfo=None, microsecond=0)

    def run_cycle(self) -> Optional[Dict]:
        """
        Run one send cycle

        Returns:
            The write result, or None if the cycle was skipped or failed
        """
        if not self._running.acquire(blocking=False):
            current_app.logger.warning("Previous QA send still running, skipping this cycle")
            return None

        try:
            return self._send()
        finally:
            self._running.release()

    def _send(self) -> Optional[Dict]:
        send_at = self.now()
        current_app.logger.info(f"Sending new QA message at {send_at.strftime(SEND_AT_FORMAT)}")

        try:
            devices = select_devices(self.barcodes, self.min_battery_level)
            if not devices:
                current_app.logger.warning("No eligible devices, QA message not sent")
                return None

            content = render_content(self.message_content, send_at.strftime(SEND_AT_FORMAT))
            locales = collect_locales(self.message_content)

            result = self.writer.write(devices, content, locales, send_at)
        except (DataAccessError, TemplateError, PersistenceError) as e:
            current_app.logger.error(f"QA send failed: {e}")
            return None

        if result is None:
            return None

        self.add_sent_message(result)
        current_app.logger.info("QA message sent")

        self.checker.check(self.history)

        return result

    def add_sent_message(self, result: Dict) -> None:
        """Keep track of a sent message, only the most recent ones are kept"""
        self._history.append(result)
        if len(self._history) > self.history_size:
            del self._history[:len(self._history) - self.history_size]
