import logging
from dataclasses import dataclass, field
from typing import List

logger = logging.getLogger("tolopani")

MAX_LOG_LINES = 200


@dataclass
class StatusStore:
    logs: List[str] = field(default_factory=list)

    def log(self, msg: str):
        logger.info(msg)
        self.logs.append(msg)
        if len(self.logs) > MAX_LOG_LINES:
            self.logs = self.logs[-MAX_LOG_LINES:]

    def recent(self, n: int = 50) -> List[str]:
        return self.logs[-n:]
