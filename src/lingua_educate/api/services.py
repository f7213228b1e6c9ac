"""Process-wide service wiring shared by the API routes."""

import functools

import structlog

from lingua_educate.challenges.engine import ChallengeEngine
from lingua_educate.challenges.question_bank import YamlQuestionBank
from lingua_educate.config import Settings, get_settings
from lingua_educate.financial.calculator import FinancialCalculator
from lingua_educate.progress.clock import SystemClock
from lingua_educate.progress.tracker import ProgressTracker
from lingua_educate.storage.key_value import JsonKeyValueStore
from lingua_educate.storage.learner_state import load_state, save_state

logger = structlog.get_logger()


class Services:
    """Calculator, tracker and challenge engine bound to one data directory.

    Every tracker change is written straight back to the store.

    Args:
        settings: Application settings.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.clock = SystemClock.from_name(settings.timezone)
        self.store = JsonKeyValueStore(settings.store_dir)
        state = load_state(
            self.store, seed=settings.seed_sample_data, now=self.clock.now()
        )
        self.tracker = ProgressTracker(state, clock=self.clock)
        self.tracker.subscribe(lambda snapshot: save_state(self.store, snapshot))
        self.calculator = FinancialCalculator(clock=self.clock.now)
        self.engine = ChallengeEngine(YamlQuestionBank(settings.question_bank_file))
        logger.info("services_ready", store_dir=str(self.store.directory))


@functools.lru_cache
def get_services() -> Services:
    """Get the service container singleton."""
    return Services(get_settings())
