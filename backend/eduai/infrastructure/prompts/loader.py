"""
Name: Prompt Loader

Responsibilities:
  - Load system prompt templates from files, one per language
  - Support versioning via PROMPT_VERSION env var
  - Cache loaded templates for performance

Collaborators:
  - config: Get prompt_version setting
  - prompts/<version>/<name>_<lang>.md: Template files

Notes:
  - Templates use $placeholders (string.Template): the JSON examples they
    contain keep their braces unescaped
  - Substituted values are inserted verbatim and never re-parsed
"""

from functools import lru_cache
from pathlib import Path
from string import Template
from threading import Lock
from typing import Dict

from ...domain.entities import Language
from ...logger import logger

# R: Directory containing versioned prompt templates
PROMPTS_DIR = Path(__file__).parent.parent.parent / "prompts"


class PromptLoader:
    """R: Load and cache prompt templates by version, name and language."""

    def __init__(self, version: str = "v1", prompts_dir: Path = PROMPTS_DIR):
        self.version = version
        self._dir = prompts_dir / version
        self._lock = Lock()
        self._templates: Dict[str, Template] = {}

    def get_template(self, name: str, language: Language) -> Template:
        """
        R: Get a template, loading it from file on first use.

        Raises:
            FileNotFoundError: If the template file doesn't exist
        """
        key = f"{name}_{language.value}"
        with self._lock:
            template = self._templates.get(key)
            if template is None:
                template = Template(self._load(key))
                self._templates[key] = template
        return template

    def _load(self, key: str) -> str:
        filepath = self._dir / f"{key}.md"
        if not filepath.exists():
            logger.error(
                "Prompt template not found",
                extra={"version": self.version, "template": key},
            )
            raise FileNotFoundError(f"Prompt template not found: {filepath}")

        text = filepath.read_text(encoding="utf-8").strip()
        logger.info(
            "Loaded prompt template",
            extra={"version": self.version, "template": key, "chars": len(text)},
        )
        return text

    def format(self, name: str, language: Language, **params: object) -> str:
        """
        R: Render a template with caller parameters.

        Raises:
            KeyError: If a placeholder has no matching parameter
        """
        return self.get_template(name, language).substitute(
            {key: str(value) for key, value in params.items()}
        )


@lru_cache
def get_prompt_loader() -> PromptLoader:
    """R: Get singleton PromptLoader with configured version."""
    from ...config import get_settings

    return PromptLoader(version=get_settings().prompt_version)
