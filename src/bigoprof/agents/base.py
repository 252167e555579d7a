# agents/base.py
import abc
from typing import Optional

from ..utils.config import Settings, get_settings
from ..utils.logger import get_logger

class Agent(abc.ABC):
    """A named component with its own logger and (overridable) settings."""

    def __init__(self, name: str, settings: Optional[Settings] = None):
        self.name = name
        self.settings = settings or get_settings()
        self.log = get_logger(name, self.settings)

    @abc.abstractmethod
    def run(self, *args, **kwargs):
        """Execute one profiling step."""
