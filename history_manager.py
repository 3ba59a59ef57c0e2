"""
History Manager for PocketCalc
Manages the bounded, most-recent-first calculation history
"""
import logging
from dataclasses import dataclass
from typing import Union

import config
from operations import Operation, ErrorKind, format_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    first_operand: float
    operation: Operation
    second_operand: float
    result: Union[float, ErrorKind]

    @property
    def is_error(self):
        return isinstance(self.result, ErrorKind)

    @property
    def result_text(self):
        if self.is_error:
            return self.result.message
        return format_number(self.result)

    def format(self):
        """Format entry for display, e.g. '3 + 4 = 7'"""
        return (f"{format_number(self.first_operand)} {self.operation.symbol} "
                f"{format_number(self.second_operand)} = {self.result_text}")

    def to_record(self):
        """JSON-safe dict for persistence"""
        result = self.result.name if self.is_error else self.result
        return {
            'first_operand': self.first_operand,
            'operation': self.operation.value,
            'second_operand': self.second_operand,
            'result': result,
        }

    @classmethod
    def from_record(cls, record):
        """Build an entry from a stored record; raises ValueError/KeyError/TypeError if malformed"""
        result = record['result']
        if isinstance(result, str):
            result = ErrorKind[result]
        else:
            result = float(result)
        return cls(
            first_operand=float(record['first_operand']),
            operation=Operation(record['operation']),
            second_operand=float(record['second_operand']),
            result=result,
        )


class HistoryManager:
    def __init__(self, entries=None, max_items=config.MAX_HISTORY_ITEMS):
        self.max_items = max_items
        self._entries = []
        for entry in entries or []:
            if len(self._entries) >= self.max_items:
                break
            if not isinstance(entry, HistoryEntry):
                try:
                    entry = HistoryEntry.from_record(entry)
                except (KeyError, ValueError, TypeError) as e:
                    logger.warning("Skipping malformed history record %r: %s", entry, e)
                    continue
            self._entries.append(entry)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def add_calculation(self, entry):
        """Add a calculation to history, evicting the oldest past the cap"""
        self._entries.insert(0, entry)
        del self._entries[self.max_items:]

    def get_calculation_history(self):
        """Get calculation history, most recent first"""
        return list(self._entries)

    def get_entry(self, index):
        """Get the entry at index (0 = most recent), or None if out of range"""
        if not isinstance(index, int) or isinstance(index, bool):
            return None
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def clear_calculation_history(self):
        """Clear all calculation history"""
        self._entries.clear()

    def format_calculation_history(self):
        """Format calculation history for display"""
        return [entry.format() for entry in self._entries]

    def to_records(self):
        return [entry.to_record() for entry in self._entries]
