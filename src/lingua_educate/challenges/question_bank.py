"""Question banks feeding the daily challenges."""

from functools import lru_cache
from pathlib import Path
from typing import Protocol

import structlog
import yaml
from pydantic import ValidationError

from lingua_educate.models.challenge import ChallengeCategory, ChallengeQuestion

logger = structlog.get_logger()

DEFAULT_BANK_PATH = (
    Path(__file__).parent.parent.parent.parent / "config" / "question_bank.yaml"
)


class QuestionBank(Protocol):
    def questions_for(
        self, language_code: str, category: ChallengeCategory
    ) -> list[ChallengeQuestion]: ...


class InMemoryQuestionBank:
    """Question bank backed by a nested mapping.

    Args:
        questions: ``{language_code: {category: [ChallengeQuestion, ...]}}``.
    """

    def __init__(
        self, questions: dict[str, dict[ChallengeCategory, list[ChallengeQuestion]]]
    ):
        self._questions = questions

    def questions_for(
        self, language_code: str, category: ChallengeCategory
    ) -> list[ChallengeQuestion]:
        return list(self._questions.get(language_code, {}).get(category, []))

    @property
    def languages(self) -> list[str]:
        return list(self._questions)


@lru_cache(maxsize=4)
def _load_yaml(path: Path) -> dict:
    if not path.exists():
        logger.warning("question_bank_missing", path=str(path))
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _parse_questions(
    language_code: str, category: ChallengeCategory, items: list
) -> list[ChallengeQuestion]:
    """Validate raw question entries, dropping the ones that do not parse."""
    parsed = []
    for index, item in enumerate(items):
        try:
            parsed.append(ChallengeQuestion.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "question_bank_invalid_question",
                language_code=language_code,
                category=category.value,
                index=index,
                errors=e.error_count(),
            )
    return parsed


class YamlQuestionBank(InMemoryQuestionBank):
    """Question bank loaded from a YAML file.

    Layout::

        languages:
          es:
            vocabulary:
              - question: "What does 'Hola' mean in English?"
                options: [Goodbye, Hello, Please, Thank you]
                correct_answer: 1
                explanation: ...
    """

    def __init__(self, path: Path = DEFAULT_BANK_PATH):
        self.path = Path(path)
        data = _load_yaml(self.path)
        questions: dict[str, dict[ChallengeCategory, list[ChallengeQuestion]]] = {}
        for code, categories in (data.get("languages") or {}).items():
            questions[code] = {}
            for name, items in (categories or {}).items():
                try:
                    category = ChallengeCategory(name)
                except ValueError:
                    logger.warning(
                        "question_bank_unknown_category", language_code=code, category=name
                    )
                    continue
                questions[code][category] = _parse_questions(code, category, items or [])
        super().__init__(questions)
        logger.debug("question_bank_loaded", path=str(self.path), languages=list(questions))
